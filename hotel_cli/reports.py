import openpyxl
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

# Excel refuses sheet titles longer than this
MAX_SHEET_TITLE = 31


def build_pdf(title, labels, rows, path):
    """Write a one-line-per-row PDF listing of a result set to ``path``."""
    c = canvas.Canvas(path, pagesize=letter)
    c.setFont("Helvetica-Bold", 16)
    c.drawString(30, 750, title)

    c.setFont("Helvetica", 12)
    c.drawString(30, 725, " | ".join(labels))
    y = 700

    for row in rows:
        c.drawString(30, y, " | ".join(str(value) for value in row))
        y -= 20

        if y < 50:
            c.showPage()
            c.setFont("Helvetica", 12)
            y = 750

    c.save()
    return path


def build_excel(title, labels, rows, path):
    """Write a result set to a single-sheet workbook at ``path``."""
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = title[:MAX_SHEET_TITLE]

    ws.append(list(labels))

    for row in rows:
        ws.append(list(row))

    wb.save(path)
    return path
