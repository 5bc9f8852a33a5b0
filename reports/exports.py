"""
Tabular export renderers (CSV, Excel, PDF).

Each renderer takes a title, a base filename, a header row and string rows
and returns a downloadable HttpResponse.
"""

import csv
import io
from datetime import datetime
from xml.sax.saxutils import escape

from django.http import HttpResponse

from openpyxl import Workbook
from openpyxl.styles import Font, Alignment, Border, Side, PatternFill
from openpyxl.utils import get_column_letter

from reportlab.lib import colors
from reportlab.lib.enums import TA_LEFT
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.units import cm
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer

HEADER_COLOR = '3B82F6'
TITLE_COLOR = '#1E3A8A'

XLSX_CONTENT_TYPE = 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'


def _attachment(response, filename):
    response['Content-Disposition'] = f'attachment; filename="{filename}"'
    return response


def render_csv(filename, headers, rows):
    response = HttpResponse(content_type='text/csv; charset=utf-8')
    writer = csv.writer(response)
    writer.writerow(headers)
    writer.writerows(rows)
    return _attachment(response, f'{filename}.csv')


def render_excel(title, filename, headers, rows):
    wb = Workbook()
    ws = wb.active
    ws.title = title[:31]

    header_font = Font(bold=True, size=11, color='FFFFFF')
    header_fill = PatternFill(start_color=HEADER_COLOR, end_color=HEADER_COLOR, fill_type='solid')
    thin_border = Border(
        left=Side(style='thin'),
        right=Side(style='thin'),
        top=Side(style='thin'),
        bottom=Side(style='thin')
    )

    for col, header in enumerate(headers, 1):
        cell = ws.cell(row=1, column=col, value=header)
        cell.font = header_font
        cell.fill = header_fill
        cell.border = thin_border
        cell.alignment = Alignment(horizontal='center')

    for row_idx, row in enumerate(rows, 2):
        for col, value in enumerate(row, 1):
            ws.cell(row=row_idx, column=col, value=value).border = thin_border

    # Size columns to their longest value
    for col, header in enumerate(headers, 1):
        longest = max([len(header)] + [len(str(row[col - 1])) for row in rows])
        ws.column_dimensions[get_column_letter(col)].width = min(longest + 2, 60)

    ws.freeze_panes = 'A2'

    output = io.BytesIO()
    wb.save(output)
    output.seek(0)

    response = HttpResponse(output.read(), content_type=XLSX_CONTENT_TYPE)
    return _attachment(response, f'{filename}.xlsx')


def render_pdf(title, filename, headers, rows, col_widths=None):
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=landscape(A4),
        rightMargin=1*cm,
        leftMargin=1*cm,
        topMargin=1.5*cm,
        bottomMargin=1.5*cm,
        title=title,
    )

    styles = getSampleStyleSheet()
    title_style = ParagraphStyle(
        'ReportTitle',
        parent=styles['Heading1'],
        fontSize=20,
        textColor=colors.HexColor(TITLE_COLOR),
        alignment=TA_LEFT,
        spaceAfter=6
    )
    subtitle_style = ParagraphStyle(
        'ReportSubtitle',
        parent=styles['Normal'],
        fontSize=11,
        textColor=colors.grey,
    )
    cell_style = ParagraphStyle('Cell', parent=styles['Normal'], fontSize=9, leading=11)

    elements = [
        Paragraph(title, title_style),
        Paragraph(f"Generated on {datetime.now().strftime('%b %d, %Y')}", subtitle_style),
        Spacer(1, 15),
    ]

    # Paragraph cells wrap long notes instead of overflowing the column
    data = [headers] + [
        [Paragraph(escape(str(value)), cell_style) for value in row]
        for row in rows
    ]
    widths = [w*cm for w in col_widths] if col_widths else None
    table = Table(data, colWidths=widths, repeatRows=1)
    table.setStyle(TableStyle([
        ('BACKGROUND', (0, 0), (-1, 0), colors.HexColor(f'#{HEADER_COLOR}')),
        ('TEXTCOLOR', (0, 0), (-1, 0), colors.white),
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
        ('FONTSIZE', (0, 0), (-1, -1), 9),
        ('GRID', (0, 0), (-1, -1), 0.5, colors.grey),
        ('VALIGN', (0, 0), (-1, -1), 'TOP'),
        ('BOTTOMPADDING', (0, 0), (-1, -1), 5),
        ('TOPPADDING', (0, 0), (-1, -1), 5),
        ('ROWBACKGROUNDS', (0, 1), (-1, -1), [colors.white, colors.HexColor('#F1F5F9')]),
    ]))
    elements.append(table)

    doc.build(elements)
    buffer.seek(0)

    response = HttpResponse(buffer.read(), content_type='application/pdf')
    return _attachment(response, f'{filename}.pdf')
