"""
Page storage - HTML pages kept as one file per slug.

Pages live in PAGES_DIR as <slug>.html. Slugs are restricted to letters,
digits, hyphens and underscores, and are stored lowercase.
"""

import html
import logging
import re
from pathlib import Path
from typing import Optional, Protocol

from bs4 import BeautifulSoup

from src.config import PAGES_DIR, SITE_LANG


logger = logging.getLogger(__name__)

PAGE_NAME_PATTERN = re.compile(r"[a-zA-Z0-9_-]+")

PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="{lang}">
<head>
    <meta charset="UTF-8">
    <title>{name}</title>
</head>
<body>
    <h1>New page: {name}</h1>
    <p>Add your content here.</p>
</body>
</html>"""


class PageStore(Protocol):
    """Read/write access to page markup by slug."""

    def read(self, slug: str) -> Optional[str]:
        """Return the page markup, or None if the page does not exist."""
        ...

    def write(self, slug: str, content: str) -> bool:
        """Store the page markup. Returns False on failure."""
        ...


def sanitize_page_name(name: Optional[str]) -> Optional[str]:
    """Return the lowercase slug for a page name, or None if it is invalid."""
    if not name:
        return None
    if not PAGE_NAME_PATTERN.fullmatch(name):
        return None
    return name.lower()


def page_title(content: str) -> Optional[str]:
    """Extract the <title> text of a page."""
    soup = BeautifulSoup(content, "html.parser")
    if soup.title and soup.title.string:
        return soup.title.string.strip()
    return None


def render_template(slug: str, lang: str = SITE_LANG) -> str:
    """Blank page markup for a new slug."""
    return PAGE_TEMPLATE.format(
        lang=html.escape(lang, quote=True),
        name=html.escape(slug, quote=True),
    )


class FilePageStorage:
    """
    File-backed page storage.

    Implements the PageStore protocol used by the suggestion pipeline,
    plus listing and creation for the editor.
    """

    def __init__(self, pages_dir: Path = PAGES_DIR):
        self.pages_dir = Path(pages_dir)
        self.pages_dir.mkdir(parents=True, exist_ok=True)

    def path_for(self, slug: str) -> Path:
        return self.pages_dir / f"{slug}.html"

    def list_pages(self) -> list[str]:
        """Get all page slugs, sorted."""
        return sorted(p.stem for p in self.pages_dir.glob("*.html") if p.is_file())

    def exists(self, slug: str) -> bool:
        return self.path_for(slug).is_file()

    def read(self, slug: str) -> Optional[str]:
        """Load a page. Returns None if the page does not exist."""
        path = self.path_for(slug)
        if not path.is_file():
            return None
        with open(path, "r", encoding="utf-8") as f:
            return f.read()

    def write(self, slug: str, content: str) -> bool:
        """Save a page, creating it if needed."""
        try:
            with open(self.path_for(slug), "w", encoding="utf-8") as f:
                f.write(content)
        except OSError as e:
            logger.error(f"Failed to save page '{slug}': {e}")
            return False
        logger.debug(f"Saved page '{slug}' ({len(content)} chars)")
        return True

    def create(self, slug: str) -> bool:
        """
        Create a new page from the blank template.

        Raises FileExistsError if the page already exists.
        Returns False if the file could not be written.
        """
        if self.exists(slug):
            raise FileExistsError(f"Page already exists: {slug}")
        created = self.write(slug, render_template(slug))
        if created:
            logger.info(f"Created page '{slug}'")
        return created

    def summaries(self) -> list[dict]:
        """Slug and title for each page."""
        pages = []
        for slug in self.list_pages():
            try:
                content = self.read(slug) or ""
            except (OSError, UnicodeDecodeError) as e:
                logger.warning(f"Could not read page '{slug}': {e}")
                content = ""
            pages.append({"slug": slug, "title": page_title(content)})
        return pages


# CLI for managing pages
if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Page Storage Manager")
    parser.add_argument("--list", action="store_true", help="List pages")
    parser.add_argument("--create", type=str, help="Create a new page")
    parser.add_argument("--show", type=str, help="Print a page's markup")

    args = parser.parse_args()

    storage = FilePageStorage()

    if args.list:
        pages = storage.summaries()
        print(f"Pages in {storage.pages_dir}:")
        for page in pages:
            print(f"  {page['slug']}: {page['title'] or '(untitled)'}")
        if not pages:
            print("  No pages yet. Create one with --create NAME")

    elif args.create:
        slug = sanitize_page_name(args.create)
        if not slug:
            print("Page names may only contain letters, digits, hyphens and underscores.")
        else:
            try:
                if storage.create(slug):
                    print(f"Created {storage.path_for(slug)}")
                else:
                    print("Failed to create the page. Check permissions.")
            except FileExistsError:
                print(f"A page named '{slug}' already exists.")

    elif args.show:
        slug = sanitize_page_name(args.show)
        content = storage.read(slug) if slug else None
        print(content if content is not None else f"Page not found: {args.show}")

    else:
        parser.print_help()
