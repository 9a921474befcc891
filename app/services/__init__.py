from app.services.export import export_filename, export_json, export_pdf
from app.services.pdf_extraction import document_text, estimate_page_count, extract_text

__all__ = [
    "document_text",
    "estimate_page_count",
    "export_filename",
    "export_json",
    "export_pdf",
    "extract_text",
]
