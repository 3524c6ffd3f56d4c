"""
Pages - storage for the site's editable HTML pages.
"""

from src.pages.storage import FilePageStorage, PageStore, page_title, sanitize_page_name

__all__ = ["FilePageStorage", "PageStore", "page_title", "sanitize_page_name"]
