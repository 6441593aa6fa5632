from flask import (Flask, render_template, request, redirect, url_for, flash, jsonify, g,
                   make_response, send_from_directory)
import os
from urllib.parse import parse_qsl
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from portfolio.audit import AuditLogger
from portfolio.catalog import PublicationCatalog
from portfolio.config import Config
from portfolio.deterrents import install_deterrents
from portfolio.download_requests import DownloadRequestService, Notifier
from portfolio.exceptions import CatalogLoadError, PublicationNotFound, ValidationFailure
from portfolio.filtering import PublicationFilter
from portfolio.formatting import CitationFormatter, format_authors
from portfolio.handoff import HandoffCodec, READER_SLOT, REQUEST_SLOT
from portfolio.preview import PreviewSession, WATERMARK_TEXT
from portfolio.rendering import CardRenderer, ListingContainer
from portfolio.utils.error_handling import endpoint_error_handler

from ui.forms import DownloadRequestForm

app = Flask(__name__)

# Configuration
app.config.update(Config.flask_settings())
app.config.update(
    RATELIMIT_ENABLED=os.getenv("RATELIMIT_ENABLED", "true").lower() == "true",
    RATELIMIT_HEADERS_ENABLED=True,
)

# Initialize rate limiter
limiter = Limiter(
    get_remote_address,
    app=app,
    storage_uri="memory://",
)

install_deterrents(app)

# Notification extension point; the default only logs
notifier = Notifier()

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


# Helpers
def get_catalog() -> PublicationCatalog:
    """The catalog for this page request, fetched at most once."""
    if "catalog" not in g:
        g.catalog = fresh_catalog()
    return g.catalog


def fresh_catalog() -> PublicationCatalog:
    return PublicationCatalog(app.config["CATALOG_SOURCE"], timeout=app.config["CATALOG_TIMEOUT"])


def handoff_codec(slot: str) -> HandoffCodec:
    return HandoffCodec(app.config["SECRET_KEY"], slot=slot, max_age=app.config["HANDOFF_MAX_AGE"])


def get_renderer() -> CardRenderer:
    reader_codec = handoff_codec(READER_SLOT)
    request_codec = handoff_codec(REQUEST_SLOT)
    return CardRenderer(
        read_url=lambda pub: url_for("reader", id=pub.id, h=reader_codec.dumps(pub)),
        request_url=lambda pub: url_for("contact", type="download", pub=request_codec.dumps(pub)),
    )


def get_request_service() -> DownloadRequestService:
    return DownloadRequestService(
        AuditLogger(app.config["AUDIT_FILE"]),
        notifier=notifier,
        admin_email=app.config["ADMIN_EMAIL"],
        dashboard_url=app.config["ADMIN_DASHBOARD_URL"],
    )


def client_ip() -> str:
    forwarded = request.headers.get("X-Forwarded-For", "")
    return forwarded or request.remote_addr


def load_listing(*containers: ListingContainer):
    """Load the catalog, or put the load error in every container.

    Returns the publications, or None when loading failed.
    """
    try:
        return get_catalog().load()
    except CatalogLoadError:
        get_renderer().show_error(containers)
        return None


def ordered_query_args():
    return parse_qsl(request.query_string.decode("utf-8"), keep_blank_values=True)


def preview_session(args) -> PreviewSession:
    try:
        page = int(args.get("page", 1))
    except (TypeError, ValueError):
        page = 1
    return PreviewSession.resolve(
        args.get("h"),
        args.get("id"),
        catalog_factory=fresh_catalog,
        codec=handoff_codec(READER_SLOT),
        page=page,
        total=app.config["PREVIEW_PAGE_LIMIT"],
    )


@app.context_processor
def inject_helpers():
    return {
        "format_authors": format_authors,
        "citation": CitationFormatter.citation,
        "reader_citation": CitationFormatter.reader_citation,
    }


@app.route("/", methods=["GET"])
def index():
    featured = ListingContainer("featured-publications")
    publications = load_listing(featured)
    if publications is not None:
        get_renderer().render(get_catalog().featured(), featured)
    return render_template("index.html", featured=featured)


@app.route("/publications", methods=["GET"])
def publications():
    grid = ListingContainer("publications-grid")
    records = load_listing(grid)
    pub_filter = PublicationFilter(records or [])
    if records is not None:
        pub_filter.apply_args(ordered_query_args())
        get_renderer().render(pub_filter.filtered, grid)
        app.logger.info(
            f"Listing {len(pub_filter.filtered)} of {len(records)} publications "
            f"(facet={pub_filter.state.facet!r}, query={pub_filter.state.query!r}, "
            f"last={pub_filter.state.last_action})"
        )
    return render_template(
        "publications.html",
        grid=grid,
        facets=pub_filter.facets(),
        state=pub_filter.state,
    )


@app.route("/api/publications", methods=["GET"])
def api_publications():
    """Filtered listing as JSON plus rendered cards, for live search."""
    grid = ListingContainer("publications-grid")
    try:
        records = get_catalog().load()
    except CatalogLoadError as e:
        app.logger.error(f"Listing API unavailable: {e}")
        return jsonify({"error": "Unable to load publications. Please try again later."}), 503

    pub_filter = PublicationFilter(records)
    pub_filter.apply_args(ordered_query_args())
    get_renderer().render(pub_filter.filtered, grid)
    return jsonify({
        "count": len(pub_filter.filtered),
        "publications": [pub.to_dict() for pub in pub_filter.filtered],
        "html": grid.__html__(),
        "facet": pub_filter.state.facet,
        "query": pub_filter.state.query,
    })


@app.route("/data/publications.json", methods=["GET"])
def catalog_resource():
    return send_from_directory(os.path.join(app.static_folder, "data"), "publications.json")


@app.route("/reader", methods=["GET"])
def reader():
    session = preview_session(request.args)
    try:
        pub = session.require_publication()
    except PublicationNotFound as e:
        app.logger.info(f"Reader: {e}")
        response = make_response(render_template("reader.html", session=session), 404)
    else:
        response = make_response(render_template(
            "reader.html",
            session=session,
            pub=pub,
            document_url=session.document_url(app.config["PREVIEW_BASE_URL"]),
            watermark=WATERMARK_TEXT,
            handoff=request.args.get("h"),
        ))
    response.headers["Cache-Control"] = "no-store"
    return response


@app.route("/reader/request", methods=["GET"])
def reader_request():
    """Leave the preview for the request form, handing the publication over."""
    session = preview_session(request.args)
    try:
        session.require_publication()
    except PublicationNotFound as e:
        app.logger.info(f"Request handover: {e}")
        flash("The requested publication could not be loaded.", "error")
        return redirect(url_for("publications"))
    token = session.start_download_request(handoff_codec(REQUEST_SLOT))
    return redirect(url_for("contact", type="download", pub=token))


@app.route("/api/preview/navigate", methods=["POST"])
def api_preview_navigate():
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        return jsonify({"error": "Request body must be a JSON object"}), 400

    session = preview_session(data)
    try:
        session.require_publication()
    except PublicationNotFound:
        return jsonify({"error": "Publication not found"}), 404

    try:
        moved = session.navigate(int(data.get("direction", 0)))
    except (TypeError, ValueError):
        return jsonify({"error": "direction must be -1 or 1"}), 400

    body = session.to_dict(app.config["PREVIEW_BASE_URL"])
    body["moved"] = moved
    return jsonify(body)


@app.route("/contact", methods=["GET", "POST"])
@limiter.limit(lambda: app.config["REQUEST_RATE_LIMIT"], methods=["POST"])
def contact():
    form = DownloadRequestForm()
    publication = handoff_codec(REQUEST_SLOT).loads(request.args.get("pub"))
    if publication is not None and not form.is_submitted():
        form.publication_id.data = publication.id

    if form.validate_on_submit():
        try:
            ack = get_request_service().process(form.to_payload(), client_ip=client_ip())
        except ValidationFailure as e:
            flash(str(e), "error")
        else:
            flash(f"{ack['message']} Request ID: {ack['requestId']}", "success")
            flash(ack["nextSteps"], "info")
            return redirect(url_for("contact"))

    return render_template(
        "contact.html",
        form=form,
        publication=publication,
        request_type=request.args.get("type", ""),
    )


@app.route(
    "/request-download",
    methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    provide_automatic_options=False,
)
@limiter.limit(lambda: app.config["REQUEST_RATE_LIMIT"], methods=["POST"])
def request_download():
    if request.method == "OPTIONS":
        response = make_response("", 200)
    elif request.method != "POST":
        response = make_response(jsonify({"error": "Method not allowed"}), 405)
    else:
        response = make_response(_process_download_request())
    response.headers.update(CORS_HEADERS)
    return response


@endpoint_error_handler
def _process_download_request():
    payload = request.get_json(silent=True)
    if payload is None:
        payload = request.form
    ack = get_request_service().process(payload, client_ip=client_ip())
    app.logger.info(f"Download request {ack['requestId']} accepted")
    return jsonify(ack), 200


# Simple health route
@app.route("/health", methods=["GET"])
def health():
    return "ok", 200


# Error handlers
@app.errorhandler(404)
def not_found_error(error):
    return render_template('error.html', error='Page not found', error_code=404), 404


@app.errorhandler(500)
def internal_error(error):
    return render_template('error.html', error='Internal server error', error_code=500), 500


@app.errorhandler(429)
def ratelimit_handler(e):
    response = make_response(jsonify({"error": "Rate limit exceeded. Please try again later."}), 429)
    if request.endpoint == "request_download":
        response.headers.update(CORS_HEADERS)
    return response


if __name__ == "__main__":
    # In production, use a production WSGI server like Gunicorn
    app.run(debug=os.environ.get('FLASK_DEBUG', 'False').lower() == 'true')
