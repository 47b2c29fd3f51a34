"""
PDF Generation Service.
Renders quotations as PDF documents using ReportLab.
"""

import logging
from datetime import date, datetime
from decimal import Decimal
from io import BytesIO
from pathlib import Path
from typing import Iterable
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import mm
from reportlab.platypus import (
    SimpleDocTemplate,
    Paragraph,
    Spacer,
    Table,
    TableStyle,
)
from reportlab.lib.enums import TA_RIGHT

from app.core.config import settings
from app.models.quotation import Quotation, ResponsibilityType
from app.models.settings import CompanyInfo, BankInfo, CompanySetting
from app.schemas.quotation import QuotationPdfOptions


logger = logging.getLogger(__name__)

# Product, brand, model, quantity, unit price, discount, total
ITEM_COLUMN_WIDTHS = [52*mm, 22*mm, 22*mm, 16*mm, 24*mm, 14*mm, 25*mm]


def _text(value) -> str:
    """Escape a value for use inside Paragraph markup."""
    return escape(str(value)) if value is not None else ""


class QuotationPDFService:
    """Service for generating quotation PDFs."""

    def __init__(self, options: QuotationPdfOptions | None = None, storage_path: str | None = None):
        self.options = options or QuotationPdfOptions()
        self.storage_path = Path(storage_path or settings.PDF_STORAGE_PATH)

        # Colors
        self.primary_color = colors.HexColor(self.options.header_color)
        self.gray_color = colors.HexColor("#6B7280")
        self.light_gray = colors.HexColor("#F3F4F6")
        self.border_color = colors.HexColor("#E5E7EB")

    def _get_styles(self):
        """Get custom paragraph styles scaled from the configured font size."""
        base = self.options.font_size
        styles = getSampleStyleSheet()

        styles.add(ParagraphStyle(
            name='QuotationTitle',
            parent=styles['Heading1'],
            fontSize=base + 11,
            leading=base + 15,
            textColor=self.primary_color,
            spaceAfter=4*mm,
        ))
        styles.add(ParagraphStyle(
            name='SectionHeader',
            parent=styles['Heading2'],
            fontSize=base + 2,
            textColor=self.primary_color,
            spaceBefore=4*mm,
            spaceAfter=2*mm,
        ))
        styles.add(ParagraphStyle(
            name='NormalText',
            parent=styles['Normal'],
            fontSize=base,
            leading=base + 3,
        ))
        styles.add(ParagraphStyle(
            name='SmallText',
            parent=styles['Normal'],
            fontSize=base - 1,
            leading=base + 2,
            textColor=self.gray_color,
        ))
        styles.add(ParagraphStyle(
            name='RightAlign',
            parent=styles['Normal'],
            fontSize=base,
            alignment=TA_RIGHT,
        ))
        styles.add(ParagraphStyle(
            name='Bold',
            parent=styles['Normal'],
            fontSize=base,
            fontName='Helvetica-Bold',
        ))
        styles.add(ParagraphStyle(
            name='HeaderCell',
            parent=styles['Normal'],
            fontSize=base,
            fontName='Helvetica-Bold',
            textColor=colors.white,
        ))
        return styles

    def _format_currency(self, amount: Decimal, currency: str) -> str:
        return f"{Decimal(amount or 0):,.2f} {currency}"

    def _format_date(self, d: date | None) -> str:
        return d.strftime("%d.%m.%Y") if d else "-"

    def _party_block(self, title: str, lines: Iterable[str], styles) -> list:
        body = "<br/>".join(line for line in lines if line)
        return [
            Paragraph(title, styles['SectionHeader']),
            Paragraph(body or "-", styles['NormalText']),
        ]

    def build_elements(
        self,
        quotation: Quotation,
        seller: CompanyInfo | None = None,
        bank: BankInfo | None = None,
        parameters: list[CompanySetting] | None = None,
    ) -> list:
        """
        Build the flowables of a quotation document.

        Args:
            quotation: Quotation with company, items and settings loaded
            seller: Company details printed as the seller
            bank: Bank account printed under the totals
            parameters: Quotation parameters flagged for PDFs

        Returns:
            List of ReportLab flowables
        """
        styles = self._get_styles()
        currency = quotation.currency
        elements = []

        # ===== HEADER =====
        header_data = [
            [
                Paragraph(f"<b>{_text(seller.name) if seller else ''}</b>", styles['Bold']),
                Paragraph("<b>QUOTATION</b>", styles['QuotationTitle']),
            ],
            [
                Paragraph(_text(seller.address) if seller else "", styles['SmallText']),
                Paragraph(f"No: {_text(quotation.quotation_number)}", styles['NormalText']),
            ],
            [
                Paragraph(f"Tel: {_text(seller.phone)}" if seller and seller.phone else "", styles['SmallText']),
                Paragraph(f"Date: {self._format_date(quotation.quotation_date)}", styles['SmallText']),
            ],
            [
                Paragraph(f"Email: {_text(seller.email)}" if seller and seller.email else "", styles['SmallText']),
                Paragraph(f"Valid until: {self._format_date(quotation.valid_until)}", styles['SmallText']),
            ],
        ]
        if seller and seller.tax_number:
            header_data.append([
                Paragraph(f"Tax no: {_text(seller.tax_number)}", styles['SmallText']),
                Paragraph("", styles['SmallText']),
            ])

        header_table = Table(header_data, colWidths=[95*mm, 80*mm])
        header_table.setStyle(TableStyle([
            ('VALIGN', (0, 0), (-1, -1), 'TOP'),
            ('ALIGN', (1, 0), (1, -1), 'RIGHT'),
        ]))
        elements.append(header_table)
        elements.append(Paragraph(_text(quotation.title), styles['Bold']))
        elements.append(Spacer(1, 6*mm))

        # ===== BUYER =====
        company = quotation.company
        elements.extend(self._party_block(
            "CUSTOMER",
            [
                f"<b>{_text(company.name)}</b>" if company else "",
                f"Attn: {_text(company.contact_person)}" if company and company.contact_person else "",
                _text(company.address) if company else "",
                _text(" ".join(filter(None, [company.city, company.country]))) if company else "",
                f"Tel: {_text(company.phone)}" if company and company.phone else "",
                f"Email: {_text(company.email)}" if company and company.email else "",
            ],
            styles,
        ))
        elements.append(Spacer(1, 6*mm))

        # ===== ITEMS =====
        elements.append(Paragraph("ITEMS", styles['SectionHeader']))
        items_data = [[
            Paragraph(label, styles['HeaderCell'])
            for label in ("Product", "Brand", "Model", "Qty", "Unit price", "Disc.", "Total")
        ]]

        main_items = quotation.main_items
        for item in main_items:
            product = item.product
            items_data.append([
                Paragraph(_text(product.name if product else item.product_id), styles['NormalText']),
                Paragraph(_text(product.brand) if product else "", styles['NormalText']),
                Paragraph(_text(product.model) if product else "", styles['NormalText']),
                Paragraph(f"{Decimal(item.quantity):g}", styles['RightAlign']),
                Paragraph(self._format_currency(item.unit_price, currency), styles['RightAlign']),
                Paragraph(f"{Decimal(item.discount_percentage):g}%", styles['RightAlign']),
                Paragraph(self._format_currency(item.total_price, currency), styles['RightAlign']),
            ])

        items_table = Table(items_data, colWidths=ITEM_COLUMN_WIDTHS, repeatRows=1)
        table_style = [
            ('BACKGROUND', (0, 0), (-1, 0), self.primary_color),
            ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
            ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
            ('LINEBELOW', (0, 0), (-1, 0), 1, self.primary_color),
        ]
        if len(items_data) > 1:
            table_style += [
                ('LINEBELOW', (0, 1), (-1, -1), 0.5, self.border_color),
                *[('BACKGROUND', (0, i), (-1, i), self.light_gray)
                  for i in range(2, len(items_data), 2)],
            ]
        items_table.setStyle(TableStyle(table_style))
        elements.append(items_table)
        elements.append(Spacer(1, 4*mm))

        # ===== PRODUCT PROPERTIES =====
        if self.options.show_product_properties:
            property_rows = []
            for item in main_items:
                if not item.product:
                    continue
                for prop in item.product.quotation_properties:
                    property_rows.append([
                        Paragraph(_text(item.product.name), styles['SmallText']),
                        Paragraph(_text(prop.property_name), styles['SmallText']),
                        Paragraph(_text(prop.property_value), styles['SmallText']),
                    ])
            if property_rows:
                elements.append(Paragraph("PRODUCT PROPERTIES", styles['SectionHeader']))
                props_table = Table(property_rows, colWidths=[55*mm, 50*mm, 70*mm])
                props_table.setStyle(TableStyle([
                    ('LINEBELOW', (0, 0), (-1, -1), 0.5, self.border_color),
                    ('VALIGN', (0, 0), (-1, -1), 'TOP'),
                ]))
                elements.append(props_table)
                elements.append(Spacer(1, 4*mm))

        # ===== TOTAL =====
        totals_table = Table(
            [["Total", self._format_currency(quotation.total_amount, currency)]],
            colWidths=[130*mm, 45*mm],
        )
        totals_table.setStyle(TableStyle([
            ('ALIGN', (0, 0), (-1, -1), 'RIGHT'),
            ('FONTNAME', (0, 0), (-1, -1), 'Helvetica-Bold'),
            ('FONTSIZE', (0, 0), (-1, -1), self.options.font_size + 1),
            ('LINEABOVE', (0, 0), (-1, 0), 1, self.primary_color),
            ('BACKGROUND', (0, 0), (-1, -1), self.light_gray),
        ]))
        elements.append(totals_table)
        elements.append(Paragraph(
            f"Total: {self._format_currency(quotation.total_amount, currency)}",
            styles['SmallText'],
        ))
        elements.append(Spacer(1, 6*mm))

        # ===== TERMS =====
        terms = quotation.settings
        term_lines = []
        if terms and terms.payment_method:
            term_lines.append(f"<b>Payment:</b> {_text(terms.payment_method.name)}")
        if terms and terms.delivery_method:
            term_lines.append(f"<b>Delivery:</b> {_text(terms.delivery_method.name)}")
        for parameter in parameters or []:
            value = (parameter.value or {}).get("name", "")
            term_lines.append(f"<b>{_text(parameter.name)}:</b> {_text(value)}")
        if term_lines:
            elements.append(Paragraph("TERMS", styles['SectionHeader']))
            elements.append(Paragraph("<br/>".join(term_lines), styles['NormalText']))

        # ===== NOTES =====
        if quotation.notes:
            elements.append(Paragraph("NOTES", styles['SectionHeader']))
            elements.append(Paragraph(_text(quotation.notes), styles['NormalText']))

        # ===== RESPONSIBILITIES =====
        for kind, title in (
            (ResponsibilityType.CUSTOMER, "CUSTOMER RESPONSIBILITIES"),
            (ResponsibilityType.SUPPLIER, "SUPPLIER RESPONSIBILITIES"),
        ):
            for responsibility in quotation.responsibilities:
                if responsibility.responsibility_type == kind and responsibility.description:
                    elements.append(Paragraph(title, styles['SectionHeader']))
                    elements.append(Paragraph(
                        _text(responsibility.description).replace("\n", "<br/>"),
                        styles['NormalText'],
                    ))

        # ===== BANK =====
        if bank:
            elements.extend(self._party_block(
                "BANK DETAILS",
                [
                    f"<b>{_text(bank.bank_name)}</b>",
                    f"Branch: {_text(bank.branch_name)}" if bank.branch_name else "",
                    f"Account holder: {_text(bank.account_holder)}" if bank.account_holder else "",
                    f"Account no: {_text(bank.account_number)}",
                    f"IBAN: {_text(bank.iban)}" if bank.iban else "",
                    f"SWIFT: {_text(bank.swift_code)}" if bank.swift_code else "",
                ],
                styles,
            ))

        # ===== FOOTER =====
        elements.append(Spacer(1, 10*mm))
        footer = self.options.footer_text or f"Generated on {self._format_date(datetime.now().date())}"
        elements.append(Paragraph(f"<i>{_text(footer)}</i>", styles['SmallText']))

        return elements

    def build_quotation_pdf(self, quotation: Quotation, **kwargs) -> bytes:
        """Render a quotation into PDF bytes."""
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=15*mm,
            leftMargin=15*mm,
            topMargin=15*mm,
            bottomMargin=15*mm,
            title=f"Quotation {quotation.quotation_number}",
        )
        doc.build(self.build_elements(quotation, **kwargs))
        logger.info("Rendered PDF for quotation %s", quotation.quotation_number)
        return buffer.getvalue()

    def save_quotation_pdf(self, quotation: Quotation, **kwargs) -> str:
        """
        Render a quotation and write it under PDF_STORAGE_PATH.

        Returns:
            Path to generated PDF file
        """
        self.storage_path.mkdir(parents=True, exist_ok=True)
        filename = f"quotation_{quotation.quotation_number.replace('/', '-')}.pdf"
        filepath = self.storage_path / filename
        filepath.write_bytes(self.build_quotation_pdf(quotation, **kwargs))
        return str(filepath)
