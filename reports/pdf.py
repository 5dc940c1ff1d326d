import io
import re

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfgen import canvas

REPORT_TITLE = 'ProjectHub - User Report'

# (label, stats attribute, indent)
STAT_LINES = [
    ('Total Projects', 'total_projects', False),
    ('Completed', 'completed_projects', True),
    ('In Progress', 'in_progress_projects', True),
    ('Aborted', 'aborted_projects', True),
    ('Projects Led', 'projects_led', False),
    ('Total Hackathons', 'total_hackathons', False),
    ('Upcoming', 'upcoming_hackathons', True),
    ('Ongoing', 'ongoing_hackathons', True),
    ('Completed', 'completed_hackathons', True),
    ('Hackathons Led', 'hackathons_led', False),
]


def report_filename(full_name):
    name = re.sub(r'\s+', '_', (full_name or '').strip()) or 'user'
    return f"{name}_report.pdf"


def report_lines(profile, stats, generated_at):
    """Text of the report, in order, as ``(text, indented)`` pairs."""
    lines = [
        (f"Name: {profile.full_name}", False),
        (f"Email: {profile.email}", False),
        (f"Generated: {generated_at.strftime('%Y-%m-%d')}", False),
    ]
    for label, attr, indented in STAT_LINES:
        text = f"  - {label}: {getattr(stats, attr)}" if indented else f"{label}: {getattr(stats, attr)}"
        lines.append((text, indented))
    return lines


def render_user_report(profile, stats, generated_at):
    buffer = io.BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=A4)
    pdf.setTitle(REPORT_TITLE)
    _, height = A4
    left = 20 * mm

    def y(offset_mm):
        return height - offset_mm * mm

    lines = report_lines(profile, stats, generated_at)
    header, statistics = lines[:3], lines[3:]

    pdf.setFont('Helvetica-Bold', 20)
    pdf.drawString(left, y(20), REPORT_TITLE)

    pdf.setFont('Helvetica', 12)
    for i, (text, _) in enumerate(header):
        pdf.drawString(left, y(35 + i * 10), text)

    pdf.setFont('Helvetica-Bold', 16)
    pdf.drawString(left, y(75), 'Statistics')

    pdf.setFont('Helvetica', 12)
    offset = 90
    for text, indented in statistics:
        pdf.drawString(left + (5 * mm if indented else 0), y(offset), text)
        offset += 10

    pdf.showPage()
    pdf.save()
    return buffer.getvalue()
