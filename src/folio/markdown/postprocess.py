"""Docs-flavoured post-processing of rendered markdown HTML.

The rendered fragment is parsed with BeautifulSoup and edited in place:

- ``[ ]`` / ``[x]`` list items become disabled checkboxes; task items and
  every list containing one get ``folio task-item`` / ``folio task-list``.
- ``.folio-hide`` and ``.folio-ignore`` elements are hidden,
  ``.folio-remove`` elements are dropped.
- Content after a ``<details>`` summary is wrapped in
  ``div.details-content``.
- Images are limited to the page width.
- Headings that carry an id get it re-derived from their text.
- With GFM enabled, each h1/h2 is followed by an ``<hr />``.
"""

import re

from bs4 import BeautifulSoup, NavigableString, Tag

TASK_ITEM_CLASSES = ("folio", "task-item")
TASK_LIST_CLASSES = ("folio", "task-list")

_TASK_MARKER_RE = re.compile(r"^\s*\[([ xX]?)\]\s*")
_HEADING_RE = re.compile(r"^h[1-6]$")


def idify(text: str) -> str:
    """Turn heading text into an anchor id.

    Example:
        idify("Getting Started, v2") → "getting-started-v2"
    """
    text = re.sub(r"[.,;'\"`]", "", text.strip())
    return re.sub(r"[^a-z0-9$_]", "-", text, flags=re.IGNORECASE).lower()


def postprocess(source: str, *, gfm: bool = True, tasks: bool = True) -> str:
    """Apply the docs edits to an HTML fragment and return it."""
    soup = BeautifulSoup(source, "html.parser")

    if tasks:
        _mark_tasks(soup)

    for tag in soup.select(".folio-hide, .folio-ignore"):
        _add_style(tag, "display: none")
    for tag in soup.select(".folio-remove"):
        if not tag.decomposed:
            tag.decompose()

    for summary in soup.select("details > summary"):
        _wrap_details_content(soup, summary)

    for img in soup.find_all("img"):
        _add_style(img, "max-width: 100%")

    for heading in soup.find_all(_HEADING_RE):
        # Only ids set by the markdown engine are normalized
        if heading.get("id"):
            heading["id"] = idify(heading.get_text())

    if gfm:
        for heading in soup.find_all(["h1", "h2"]):
            heading.insert_after(soup.new_tag("hr"))
            heading.insert_after(NavigableString("\n"))

    return str(soup)


def _mark_tasks(soup: BeautifulSoup) -> None:
    items: list[Tag] = []
    for li in soup.find_all("li"):
        first = next((c for c in li.contents if not _is_blank(c)), None)
        if isinstance(first, NavigableString):
            marker = _TASK_MARKER_RE.match(str(first))
            if marker is None:
                continue
            checkbox = soup.new_tag("input", attrs={"type": "checkbox", "disabled": ""})
            if marker.group(1) in ("x", "X"):
                checkbox["checked"] = ""
            first.replace_with(NavigableString(" " + str(first)[marker.end() :]))
            li.insert(0, checkbox)
        elif not (isinstance(first, Tag) and first.name == "input" and first.get("type") == "checkbox"):
            continue
        items.append(li)

    for li in items:
        _add_classes(li, TASK_ITEM_CLASSES)
        for ul in li.find_parents("ul"):
            _add_classes(ul, TASK_LIST_CLASSES)


def _wrap_details_content(soup: BeautifulSoup, summary: Tag) -> None:
    siblings = summary.find_next_siblings()
    if not siblings:
        return
    wrapper = soup.new_tag("div", attrs={"class": "details-content"})
    siblings[0].insert_before(wrapper)
    for sibling in siblings:
        wrapper.append(sibling.extract())


def _add_classes(tag: Tag, classes: tuple[str, ...]) -> None:
    current = list(tag.get("class") or [])
    tag["class"] = current + [c for c in classes if c not in current]


def _add_style(tag: Tag, declaration: str) -> None:
    existing = (tag.get("style") or "").strip().rstrip(";")
    tag["style"] = f"{existing}; {declaration}" if existing else declaration


def _is_blank(node: object) -> bool:
    return isinstance(node, NavigableString) and not node.strip()
