"""Page range plugin."""

manifest = {
    "title": "Page Ranges",
    "summary": "Turn typed page selections like 1-3,5,7- into validated page lists for document tools.",
    "blueprint": "page_ranges",
    "category": "Document Utilities",
}


__all__ = ["manifest"]
