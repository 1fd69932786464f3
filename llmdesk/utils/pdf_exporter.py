"""
PDF Export Utility for the news dashboard
Renders a ticker's sentiment summary, tallies and articles as a printable report
"""
import io
import re
from datetime import datetime
from typing import List, Optional
from xml.sax.saxutils import escape
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.lib.colors import HexColor, black, grey
from reportlab.lib.units import inch
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle
from reportlab.lib.enums import TA_CENTER
import structlog

from llmdesk.models import Article, ChartDatum, NewsSummaryResponse, Sentiment

logger = structlog.get_logger()

SENTIMENT_COLORS = {
    Sentiment.POSITIVE: HexColor('#27AE60'),
    Sentiment.NEGATIVE: HexColor('#C0392B'),
    Sentiment.NEUTRAL: HexColor('#7F8C8D'),
}


class PDFExporter:
    """Handles PDF generation for news sentiment reports"""

    def __init__(self):
        self.styles = getSampleStyleSheet()
        self._setup_custom_styles()

    def _setup_custom_styles(self):
        """Setup custom styles for better PDF formatting"""

        self.styles.add(ParagraphStyle(
            name='CustomTitle',
            parent=self.styles['Title'],
            fontSize=20,
            spaceAfter=30,
            textColor=HexColor('#2C3E50'),
            alignment=TA_CENTER
        ))

        self.styles.add(ParagraphStyle(
            name='SectionHeader',
            parent=self.styles['Heading1'],
            fontSize=14,
            spaceBefore=20,
            spaceAfter=12,
            textColor=HexColor('#34495E')
        ))

        self.styles.add(ParagraphStyle(
            name='ArticleTitle',
            parent=self.styles['Heading2'],
            fontSize=11,
            spaceBefore=10,
            spaceAfter=4,
            textColor=HexColor('#2980B9')
        ))

        self.styles.add(ParagraphStyle(
            name='Metadata',
            parent=self.styles['Normal'],
            fontSize=9,
            textColor=grey,
            spaceBefore=2,
            spaceAfter=2
        ))

    def export_news_report(self, result: NewsSummaryResponse, ticker: str,
                           from_date: Optional[str] = None, to_date: Optional[str] = None) -> bytes:
        """Export a news sentiment summary to PDF"""

        buffer = io.BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            rightMargin=72,
            leftMargin=72,
            topMargin=72,
            bottomMargin=18,
            title=f"{ticker} News Summary"
        )

        story = []

        story.append(Paragraph(f"{escape(ticker)} News Sentiment Report", self.styles['CustomTitle']))
        story.append(self._create_metadata_table(result, ticker, from_date, to_date))
        story.append(Spacer(1, 20))

        story.append(Paragraph("Summary", self.styles['SectionHeader']))
        story.append(Paragraph(escape(result.summary or "No summary available."), self.styles['Normal']))

        if result.chartData:
            story.append(Paragraph("Sentiment Breakdown", self.styles['SectionHeader']))
            story.append(self._create_breakdown_table(result.chartData))

        if result.articles:
            story.append(Paragraph("Articles", self.styles['SectionHeader']))
            story.extend(self._create_articles_section(result.articles))

        doc.build(story)
        buffer.seek(0)
        logger.info("News report exported", ticker=ticker, articles=len(result.articles))
        return buffer.read()

    def _create_metadata_table(self, result: NewsSummaryResponse, ticker: str,
                               from_date: Optional[str], to_date: Optional[str]) -> Table:
        metadata_data = [
            ["Generated", datetime.now().strftime("%Y-%m-%d %H:%M:%S")],
            ["Ticker", ticker],
            ["Date Range", f"{from_date or 'any'} to {to_date or 'latest'}"],
            ["Overall Sentiment", self._plain(result.sentiment)],
            ["Articles", str(len(result.articles))]
        ]

        metadata_table = Table(metadata_data, colWidths=[2*inch, 3*inch])
        metadata_table.setStyle(TableStyle([
            ('BACKGROUND', (0, 0), (0, -1), HexColor('#ECF0F1')),
            ('TEXTCOLOR', (0, 0), (-1, -1), black),
            ('ALIGN', (0, 0), (-1, -1), 'LEFT'),
            ('FONTNAME', (0, 0), (0, -1), 'Helvetica-Bold'),
            ('FONTNAME', (1, 0), (1, -1), 'Helvetica'),
            ('FONTSIZE', (0, 0), (-1, -1), 9),
            ('GRID', (0, 0), (-1, -1), 1, HexColor('#BDC3C7'))
        ]))

        return metadata_table

    def _create_breakdown_table(self, chart_data: List[ChartDatum]) -> Table:
        table_data = [["Sentiment", "Articles"]]
        for datum in chart_data:
            table_data.append([datum.name.value, str(datum.value)])

        table = Table(table_data, colWidths=[2*inch, 1*inch])
        style = [
            ('BACKGROUND', (0, 0), (-1, 0), HexColor('#3498DB')),
            ('TEXTCOLOR', (0, 0), (-1, 0), HexColor('#FFFFFF')),
            ('ALIGN', (0, 0), (-1, -1), 'LEFT'),
            ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'),
            ('FONTNAME', (0, 1), (-1, -1), 'Helvetica'),
            ('FONTSIZE', (0, 0), (-1, -1), 9),
            ('GRID', (0, 0), (-1, -1), 1, HexColor('#BDC3C7'))
        ]
        for row, datum in enumerate(chart_data, 1):
            style.append(('TEXTCOLOR', (0, row), (0, row), SENTIMENT_COLORS[datum.name]))
        table.setStyle(TableStyle(style))

        return table

    def _create_articles_section(self, articles: List[Article]) -> list:
        elements = []

        for i, article in enumerate(articles, 1):
            elements.append(Paragraph(f"{i}. {escape(article.title or 'Untitled')}", self.styles['ArticleTitle']))

            meta = [f"Sentiment: {article.sentiment.value if article.sentiment else 'Unknown'}"]
            if article.publishedAt:
                meta.append(f"Published: {article.publishedAt}")
            elements.append(Paragraph(escape(" | ".join(meta)), self.styles['Metadata']))

            if article.description:
                elements.append(Paragraph(escape(article.description), self.styles['Normal']))
            if article.url:
                elements.append(Paragraph(escape(article.url), self.styles['Metadata']))

        return elements

    @staticmethod
    def _plain(text: str) -> str:
        """Drop the emoji tag, which the base-14 fonts cannot render"""
        return re.sub(r'^[^\w]+', '', text).strip()

    def generate_filename(self, ticker: str) -> str:
        clean_name = re.sub(r'[^\w\-]', '_', ticker, flags=re.ASCII).strip('_') or "report"
        return f"{clean_name}-summary.pdf"


# Global PDF exporter instance
pdf_exporter = PDFExporter()
