"""Cosmetic anti-copy deterrents.

These add UI friction only: everything runs in the visitor's own browser
and is trivially bypassed. Each piece is independent; none may get in the
way of clicking, scrolling or typing.

Server side, HTML responses get the deterrent script and print stylesheet
injected and every ``<img>`` wrapped in a decorative overlay. The script
(``ui/static/js/deterrents.js``) handles the browser events and overlays
images inserted after load.
"""
import logging
import re

from flask import Flask, Response, url_for

logger = logging.getLogger(__name__)

MARKER_ATTR = "data-deterrents"
WATERMARK_CLASS = "watermarked"

PRINT_MESSAGE = """\
<div class="print-message" {marker} style="display: none;">
    <h2>Content Protection</h2>
    <p>Printing is disabled for copyright protection.</p>
    <p>To request a copy, please use the contact form.</p>
    <p><a href="{contact_url}">Request Access</a></p>
</div>"""

OVERLAY_STYLE = (
    "position: absolute; top: 0; left: 0; width: 100%; height: 100%; "
    "background: repeating-linear-gradient(45deg, transparent, transparent 10px, "
    "rgba(0,0,0,0.02) 10px, rgba(0,0,0,0.02) 20px); pointer-events: none;"
)

_IMG_RE = re.compile(r"<img\b[^>]*>", re.IGNORECASE)
_CLASS_RE = re.compile(r"""\bclass\s*=\s*(["'])(.*?)\1""", re.IGNORECASE | re.DOTALL)


def _mark_img(tag: str) -> str:
    match = _CLASS_RE.search(tag)
    if match:
        classes = f"{match.group(2)} {WATERMARK_CLASS}".strip()
        return tag[:match.start()] + f'class="{classes}"' + tag[match.end():]
    head, tail = (tag[:-2], "/>") if tag.endswith("/>") else (tag[:-1], ">")
    return f'{head.rstrip()} class="{WATERMARK_CLASS}"{tail}'


def _is_marked(tag: str) -> bool:
    match = _CLASS_RE.search(tag)
    return bool(match) and WATERMARK_CLASS in match.group(2).split()


def watermark_media(html: str) -> str:
    """Wrap each image in an overlay container, once per image."""
    def wrap(match):
        tag = match.group(0)
        if _is_marked(tag):
            return tag
        return (
            '<span class="media-watermark" style="position: relative; display: inline-block;">'
            f'{_mark_img(tag)}<span class="media-watermark-overlay" style="{OVERLAY_STYLE}"></span>'
            "</span>"
        )

    return _IMG_RE.sub(wrap, html)


def inject_deterrents(html: str, script_url: str, style_url: str, contact_url: str) -> str:
    """Add the deterrent assets and print message to a full HTML document, once."""
    if MARKER_ATTR in html:
        return html

    head_tags = f'<link rel="stylesheet" href="{style_url}" media="print">'
    body_tags = (
        PRINT_MESSAGE.format(marker=MARKER_ATTR, contact_url=contact_url)
        + f'\n<script src="{script_url}" defer></script>'
    )

    lowered = html.lower()
    head_end = lowered.find("</head>")
    body_end = lowered.rfind("</body>")
    if body_end == -1:
        return html

    html = html[:body_end] + body_tags + "\n" + html[body_end:]
    if head_end != -1:
        html = html[:head_end] + head_tags + "\n" + html[head_end:]
    return html


def install_deterrents(app: Flask) -> None:
    """Register the response hook that applies the deterrents to HTML pages."""

    @app.after_request
    def apply_deterrents(response: Response) -> Response:
        if not app.config.get("DETERRENTS_ENABLED", True):
            return response
        if response.mimetype != "text/html" or response.direct_passthrough:
            return response

        html = response.get_data(as_text=True)
        html = inject_deterrents(
            html,
            script_url=url_for("static", filename="js/deterrents.js"),
            style_url=url_for("static", filename="css/print-protection.css"),
            contact_url=url_for("contact"),
        )
        response.set_data(watermark_media(html))
        return response

    logger.info("Content deterrents installed")
