from __future__ import annotations

from typing import Optional

from fpdf import FPDF

from .models import Product, PurchaseOrder, Supplier


def purchase_order_pdf(po: PurchaseOrder, supplier: Supplier, product: Optional[Product] = None) -> bytes:
    offer = supplier.offer_for(po.product_id)
    unit_price = offer.price if offer else 0.0
    pdf = FPDF(orientation="P", unit="mm", format="A4")
    pdf.add_page()
    pdf.set_font("Helvetica", "B", 16)
    pdf.cell(0, 10, f"Purchase Order {po.po_id}", ln=1)
    pdf.set_font("Helvetica", "", 12)
    pdf.cell(0, 8, f"Supplier: {supplier.name} ({supplier.supplier_id})", ln=1)
    if supplier.contact_person or supplier.email:
        pdf.cell(0, 8, f"Contact: {supplier.contact_person} {supplier.email}".strip(), ln=1)
    pdf.cell(0, 8, f"Status: {po.status}", ln=1)
    pdf.cell(0, 8, f"Order date: {po.order_date}", ln=1)
    pdf.cell(0, 8, f"Expected delivery: {po.expected_delivery_date}", ln=1)
    if po.actual_delivery_date:
        pdf.cell(0, 8, f"Delivered: {po.actual_delivery_date}", ln=1)
    pdf.ln(4)
    pdf.set_font("Helvetica", "B", 12)
    pdf.cell(30, 8, "Product", border=1)
    pdf.cell(70, 8, "Name", border=1)
    pdf.cell(25, 8, "Qty", border=1)
    pdf.cell(30, 8, "Unit price", border=1)
    pdf.cell(35, 8, "Line total", border=1, ln=1)
    pdf.set_font("Helvetica", "", 12)
    line_total = float(po.quantity_ordered) * float(unit_price)
    pdf.cell(30, 8, po.product_id, border=1)
    pdf.cell(70, 8, product.name if product else "", border=1)
    pdf.cell(25, 8, str(po.quantity_ordered), border=1)
    pdf.cell(30, 8, f"{unit_price:.2f}", border=1)
    pdf.cell(35, 8, f"{line_total:.2f}", border=1, ln=1)
    out = pdf.output(dest="S")
    if isinstance(out, (bytes, bytearray)):
        return bytes(out)
    return str(out).encode("latin1")
