from typing import Dict, Optional, Tuple
from urllib.parse import urljoin

import pytest
from bs4 import BeautifulSoup

from spa_capture.capture import STAMP_CAPTURE_MARKER_JS
from spa_capture.models import NavigationError
from spa_capture.scripts import STRIP_SCRIPTS_JS
from spa_capture.seo import READ_SEO_FIELDS_JS
from spa_capture.stylesheets import INLINE_STYLESHEETS_JS, LIST_LOCAL_STYLESHEETS_JS


class FakeSession:
    """BrowserSession double that applies the in-page scripts to a parsed DOM."""

    def __init__(
        self,
        html: str,
        responses: Optional[Dict[str, Tuple[int, str]]] = None,
        base_url: str = "https://example.com/",
        navigation_error: Optional[str] = None,
    ) -> None:
        self.soup = BeautifulSoup(html, "html.parser")
        self.responses = responses or {}
        self.base_url = base_url
        self.navigation_error = navigation_error
        self.visited = []
        self.evaluated = []
        self.closed = False
        self._handlers = {
            LIST_LOCAL_STYLESHEETS_JS: self._list_local_stylesheets,
            INLINE_STYLESHEETS_JS: self._inline_stylesheets,
            STRIP_SCRIPTS_JS: self._strip_scripts,
            READ_SEO_FIELDS_JS: self._read_seo_fields,
            STAMP_CAPTURE_MARKER_JS: self._stamp_marker,
        }

    async def goto(self, url, timeout):
        self.visited.append(url)
        if self.navigation_error:
            raise NavigationError(self.navigation_error)

    async def wait_for_selector(self, selector, timeout):
        return self.soup.select_one(selector) is not None

    async def evaluate(self, script, arg=None):
        self.evaluated.append(script)
        handler = self._handlers[script]
        return handler(arg) if arg is not None else handler()

    async def content(self):
        return str(self.soup)

    async def close(self):
        self.closed = True

    def _stylesheet_links(self):
        return [
            tag
            for tag in self.soup.find_all("link")
            if "stylesheet" in [token.lower() for token in tag.get("rel") or []]
        ]

    def _list_local_stylesheets(self):
        urls = [
            urljoin(self.base_url, link["href"])
            for link in self._stylesheet_links()
            if link.get("href")
        ]
        return [url for url in urls if url.startswith("file:")]

    def _inline_stylesheets(self, arg):
        outcomes = []
        for link in self._stylesheet_links():
            href = (link.get("href") or "").strip()
            if not href:
                outcomes.append({"href": "unknown", "ok": False, "error": "missing href"})
                continue
            url = urljoin(self.base_url, href)
            if url in arg["preloaded"]:
                response = (200, arg["preloaded"][url])
            else:
                response = self.responses.get(url)
            if response is None:
                outcomes.append({"href": href, "ok": False, "error": "Failed to fetch"})
                continue
            status, body = response
            if not 200 <= status < 300:
                outcomes.append({"href": href, "ok": False, "error": f"HTTP {status}"})
                continue
            style = self.soup.new_tag("style", attrs={"data-inlined-from": href})
            style.string = body
            link.replace_with(style)
            outcomes.append({"href": href, "ok": True, "error": None})
        return outcomes

    def _strip_scripts(self, asset_pattern):
        scripts = [
            tag
            for tag in self.soup.find_all("script")
            if (tag.get("type") or "").strip().lower() == "module"
            or asset_pattern in (tag.get("src") or "")
        ]
        for tag in scripts:
            tag.decompose()
        return len(scripts)

    def _read_seo_fields(self):
        def meta(selector):
            tag = self.soup.select_one(selector)
            return (tag.get("content") or "") if tag else None

        canonical = self.soup.select_one('link[rel="canonical"]')
        h1 = self.soup.find("h1")
        return {
            "title": self.soup.title.get_text() if self.soup.title else "",
            "description": meta('meta[name="description"]'),
            "canonical": canonical.get("href") if canonical else None,
            "og_title": meta('meta[property="og:title"]'),
            "og_description": meta('meta[property="og:description"]'),
            "og_image": meta('meta[property="og:image"]'),
            "og_url": meta('meta[property="og:url"]'),
            "twitter_card": meta('meta[name="twitter:card"]'),
            "json_ld": "present"
            if self.soup.select_one('script[type="application/ld+json"]')
            else None,
            "h1": h1.get_text() if h1 else None,
        }

    def _stamp_marker(self, arg):
        head = self.soup.head
        if head is None:
            head = self.soup.new_tag("head")
            (self.soup.html or self.soup).insert(0, head)
        head.append(
            self.soup.new_tag("meta", attrs={"name": arg["markerKey"], "content": arg["marker"]})
        )
        head.append(
            self.soup.new_tag(
                "meta", attrs={"name": arg["timestampKey"], "content": arg["timestamp"]}
            )
        )


@pytest.fixture
def make_session():
    return FakeSession
