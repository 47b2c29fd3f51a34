"""
Quotation PDF rendering tests.
"""

from datetime import date
from decimal import Decimal
from pathlib import Path

from reportlab.platypus import Paragraph, Table

from app.models.company import Company
from app.models.product import Product, ProductProperty
from app.models.quotation import Quotation, QuotationItem
from app.models.settings import CompanyInfo, BankInfo, CompanySetting
from app.schemas.quotation import QuotationPdfOptions
from app.services.pdf import QuotationPDFService


def flatten_text(elements) -> list[str]:
    """Plain text of every Paragraph and table cell, in document order."""
    texts = []
    for element in elements:
        if isinstance(element, Paragraph):
            texts.append(element.getPlainText())
        elif isinstance(element, Table):
            for row in element._cellvalues:
                texts.extend(flatten_text(
                    cell if isinstance(cell, (Paragraph, Table)) else _Raw(cell) for cell in row
                ))
        elif isinstance(element, _Raw):
            texts.append(str(element.value))
    return texts


class _Raw:
    def __init__(self, value):
        self.value = value


def make_quotation(**fields) -> Quotation:
    defaults = dict(
        id=1,
        company_id=1,
        title="Pump station",
        quotation_number="TKL-20260315-001",
        currency="TRY",
        quotation_date=date(2026, 3, 15),
        valid_until=date(2026, 4, 15),
        total_amount=Decimal("0"),
        revision_number=0,
    )
    defaults.update(fields)
    quotation = Quotation(**defaults)
    quotation.company = Company(name="Acme Makina", contact_person="Ayse Demir", city="Izmir")
    return quotation


def test_zero_item_quotation_renders_header_and_zero_total():
    quotation = make_quotation()
    service = QuotationPDFService()

    texts = flatten_text(service.build_elements(quotation))

    assert any("TKL-20260315-001" in t for t in texts)
    assert "QUOTATION" in texts
    assert "0.00 TRY" in texts
    assert service.build_quotation_pdf(quotation).startswith(b"%PDF")


def test_items_properties_and_parties():
    product = Product(name="Pump", brand="Grundfos", model="CR-10", unit_price=Decimal("100"))
    product.properties = [
        ProductProperty(property_name="Power", property_value="5 kW", show_in_quotation=True, display_order=0),
        ProductProperty(property_name="Internal code", property_value="X1", show_in_quotation=False, display_order=1),
    ]
    quotation = make_quotation(total_amount=Decimal("180.00"), notes="Prices exclude VAT")
    quotation.items = [
        QuotationItem(
            product=product,
            product_id=1,
            quantity=Decimal("2"),
            unit_price=Decimal("100"),
            discount_percentage=Decimal("10"),
            total_price=Decimal("180.00"),
            is_sub_item=False,
        ),
    ]
    seller = CompanyInfo(name="Tekel Muhendislik", tax_number="1234567890")
    bank = BankInfo(bank_name="Ziraat", account_number="42", iban="TR00 0000")
    parameters = [CompanySetting(setting_type="delivery_time", name="Delivery time",
                                 value={"name": "4 weeks", "show_in_pdf": True})]

    texts = flatten_text(QuotationPDFService().build_elements(
        quotation, seller=seller, bank=bank, parameters=parameters,
    ))
    joined = "\n".join(texts)

    assert "Grundfos" in texts
    assert "180.00 TRY" in joined
    assert "Power" in texts and "5 kW" in texts
    assert "Internal code" not in texts
    assert "Tekel Muhendislik" in joined
    assert "IBAN: TR00 0000" in joined
    assert "4 weeks" in joined
    assert "Prices exclude VAT" in texts


def test_properties_can_be_hidden_and_text_is_escaped():
    product = Product(name="R&D pump", unit_price=Decimal("1"))
    product.properties = [
        ProductProperty(property_name="Power", property_value="5 kW", show_in_quotation=True, display_order=0),
    ]
    quotation = make_quotation(title="Pumps <north> & south")
    quotation.items = [
        QuotationItem(product=product, product_id=1, quantity=Decimal("1"), unit_price=Decimal("1"),
                      discount_percentage=Decimal("0"), total_price=Decimal("1"), is_sub_item=False),
    ]
    options = QuotationPdfOptions(show_product_properties=False, footer_text="Thank you")
    service = QuotationPDFService(options)

    texts = flatten_text(service.build_elements(quotation))

    assert "Power" not in texts
    assert "R&D pump" in texts
    assert "Pumps <north> & south" in texts
    assert "Thank you" in texts
    assert service.build_quotation_pdf(quotation).startswith(b"%PDF")


def test_save_quotation_pdf(tmp_path):
    quotation = make_quotation()
    service = QuotationPDFService(storage_path=str(tmp_path))

    path = Path(service.save_quotation_pdf(quotation))

    assert path.parent == tmp_path
    assert path.name == "quotation_TKL-20260315-001.pdf"
    assert path.read_bytes().startswith(b"%PDF")
