# agent_plugins/core/search.py
# Purpose: google-search plugin. SEARCH_GOOGLE (Custom Search JSON API) and
# GET_PAGE_CONTENT (fetch + strip a web page to readable text).
from __future__ import annotations

import os
from typing import List, Optional, Tuple

import requests
from bs4 import BeautifulSoup

from agent_plugins.models import ActionResponse, SearchResult
from agent_plugins.utils.formatting import format_page_content, format_search_results
from agent_plugins.utils.ratelimit import expect_shape, http_get_json, http_get_text
from agent_plugins.utils.respond import Callback, emit

GOOGLE_SEARCH_URL = "https://www.googleapis.com/customsearch/v1"

UNWANTED_TAGS = [
    "script", "meta", "style", "svg", "button", "img", "link", "a",
    "figure", "form", "picture", "noscript",
]


def _dbg(msg: str) -> None:
    print(f"[SEARCH] {msg}")


def _credentials() -> Tuple[str, str]:
    key = os.getenv("GOOGLE_API_KEY", "").strip()
    cx = os.getenv("SEARCH_ENGINE_ID", "").strip()
    if not key or not cx:
        raise ValueError("Google search is not configured (set GOOGLE_API_KEY and SEARCH_ENGINE_ID)")
    return key, cx


def google_search(query: str) -> List[SearchResult]:
    q = (query or "").strip()
    if not q:
        raise ValueError("search query is empty")
    key, cx = _credentials()
    data = expect_shape(http_get_json("google", GOOGLE_SEARCH_URL, {"key": key, "cx": cx, "q": q}),
                        dict, "Google")
    items = [it for it in (data.get("items") or []) if isinstance(it, dict)]
    _dbg(f"query={q!r} items={len(items)}")
    return [
        SearchResult(
            title=it.get("title") or "",
            link=it.get("link") or "",
            snippet=it.get("snippet") or "",
            formattedUrl=it.get("formattedUrl") or it.get("link") or "",
        )
        for it in items
    ]


def extract_page_text(html: str) -> Tuple[str, str]:
    """Return (title, body text without blank lines) with UNWANTED_TAGS removed."""
    soup = BeautifulSoup(html or "", "html.parser")
    title = soup.title.get_text(strip=True) if soup.title else ""
    for tag in soup(UNWANTED_TAGS):
        tag.decompose()
    root = soup.body or soup
    lines = [ln for ln in root.get_text().split("\n") if ln.strip()]
    return title, "\n".join(lines)


def fetch_page_content(url: str) -> Tuple[str, str]:
    u = (url or "").strip()
    if not u.startswith(("http://", "https://")):
        raise ValueError(f"invalid URL '{url}': must start with http:// or https://")
    html = http_get_text("web", u)
    return extract_page_text(html)


# ---------- actions ----------

def search_google(query: str, callback: Optional[Callback] = None) -> ActionResponse:
    emit(callback, "🔍 Searching Google...", "processing")
    try:
        results = google_search(query)
    except (requests.RequestException, ValueError) as e:
        _dbg(f"search FAIL: {e}")
        return emit(callback, f"Error performing search: {e}", "error")
    return emit(callback, format_search_results(results), "success",
                [r.model_dump() for r in results])


def get_page_content(url: str, callback: Optional[Callback] = None) -> ActionResponse:
    emit(callback, "📄 Fetching page content...", "processing")
    try:
        title, content = fetch_page_content(url)
    except (requests.RequestException, ValueError) as e:
        _dbg(f"page FAIL url={url}: {e}")
        return emit(callback, f"Error fetching page content: {e}", "error")
    _dbg(f"page OK url={url} chars={len(content)}")
    return emit(callback, format_page_content(title, content), "success",
                {"url": url, "title": title, "content": content})
