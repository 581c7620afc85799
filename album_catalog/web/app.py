"""
Flask front end for the Album Catalog.

Server-rendered pages for searching, adding, deleting, editing, and listing
albums. The AlbumStore is built once by the process bootstrap and injected
into `create_app`; handlers reach it through `app.extensions`, never through a
module global. Werkzeug serves each request on its own thread, and every
failure is turned into an error page for that request only.
"""

from __future__ import annotations

from typing import Any, Optional

from flask import Flask, current_app, jsonify, render_template, request

from album_catalog.config import Settings, get_settings
from album_catalog.dispatcher import dispatch
from album_catalog.domain.errors import AlbumNotFound, StorageError, ValidationError
from album_catalog.domain.models import Criteria
from album_catalog.domain.normalize import clean_text, normalize_price
from album_catalog.infrastructure.album_store import AlbumStore
from album_catalog.utils.logging import get_logger

log = get_logger(__name__)

STORE_KEY = "album_store"


def _store() -> AlbumStore:
    return current_app.extensions[STORE_KEY]


def _form_choices() -> dict[str, Any]:
    store = _store()
    return {
        "artists": store.distinct_artists(),
        "titles": store.distinct_titles(),
        "price_range": store.price_range(),
    }


def search():
    """Blank search form on GET; dispatch the submitted criteria on POST."""
    if request.method != "POST":
        return render_template("search.html", success=False, **_form_choices())

    criteria = Criteria.from_form(request.form)
    result = dispatch(_store(), criteria)
    return render_template(
        "search.html",
        success=True,
        result=result,
        criteria=criteria,
        **_form_choices(),
    )


def add():
    title = clean_text(request.form.get("title"))
    artist = clean_text(request.form.get("artist"))
    price_text = clean_text(request.form.get("price"))

    if not (title or artist or price_text):
        return render_template("add.html", success=False)

    price = normalize_price(price_text) if price_text else normalize_price(0)
    album_id = _store().insert(title, artist, price)
    return render_template(
        "add.html",
        success=True,
        message=f"{title} by {artist} ${price}",
        album_id=album_id,
    )


def delete():
    title = clean_text(request.form.get("title"))
    artist = clean_text(request.form.get("artist"))

    if not title or not artist:
        store = _store()
        return render_template(
            "delete.html",
            success=False,
            artists=store.distinct_artists(),
            titles=store.distinct_titles(),
        )

    affected = _store().delete(title, artist)
    if affected == 0:
        log.warning(f"This album doesn't exist! {title} by {artist}")
        message = f"This album doesn't exist! {title} by {artist}"
    else:
        message = f"Successful deletion of album! {title} by {artist}"
    return render_template("delete.html", success=True, message=message, affected=affected)


def edit():
    """
    GET shows the edit form prefilled from a search result; POST applies it.

    Albums are matched by their current title and artist, so every album
    sharing that pair is rewritten.
    """
    if request.method != "POST":
        album_id = request.args.get("id", type=int)
        if album_id is not None:
            album = _store().get_by_id(album_id)
            current = {"title": album.title, "artist": album.artist, "price": album.price}
        else:
            current = {
                "title": clean_text(request.args.get("title")),
                "artist": clean_text(request.args.get("artist")),
                "price": clean_text(request.args.get("price")),
            }
        if not current["title"] or not current["artist"]:
            return render_template(
                "edit.html", success=False, editing=False, message="Nothing to edit. Try something else!"
            )
        return render_template("edit.html", success=False, editing=True, current=current)

    current_title = clean_text(request.form.get("current_title"))
    current_artist = clean_text(request.form.get("current_artist"))
    new_title = clean_text(request.form.get("title")) or current_title
    new_artist = clean_text(request.form.get("artist")) or current_artist
    price_text = clean_text(request.form.get("price"))

    if not current_title or not current_artist:
        return render_template(
            "edit.html", success=False, editing=False, message="Nothing to edit. Try something else!"
        )

    # A blank price keeps the current one.
    price = normalize_price(price_text) if price_text else None
    count = _store().update(current_title, current_artist, new_title, new_artist, price)
    if count == 0:
        message = f"No album matched {current_title} by {current_artist}"
    else:
        message = f"Success updating {current_title} by {current_artist}"
    return render_template("edit.html", success=True, editing=False, message=message, count=count)


def dump():
    albums = _store().dump()
    return render_template("dump.html", albums=albums)


def healthz():
    try:
        albums = _store().count()
    except StorageError as exc:
        return jsonify({"status": "unavailable", "error": str(exc)}), 503
    return jsonify({"status": "ok", "albums": albums})


def _render_error(status: int, message: str):
    return render_template("error.html", status=status, message=message), status


def _handle_validation_error(exc: ValidationError):
    log.info("Rejected input", extra={"path": request.path, "field": exc.field, "error": str(exc)})
    return _render_error(400, str(exc))


def _handle_not_found(exc: AlbumNotFound):
    return _render_error(404, str(exc))


def _handle_storage_error(exc: StorageError):
    log.error(
        "Request failed on storage",
        extra={"path": request.path, "operation": exc.operation, "error": str(exc)},
    )
    return _render_error(503, "The album database is unavailable right now. Please try again.")


def create_app(store: Optional[AlbumStore] = None, settings: Optional[Settings] = None) -> Flask:
    """
    Application factory.

    Parameters
    ----------
    store : AlbumStore, optional
        Store to serve from. When omitted one is opened from settings; the
        caller is then responsible for closing ``app.extensions["album_store"]``.
    settings : Settings, optional
        Defaults to the cached process settings.
    """
    settings = settings or get_settings()
    app = Flask(__name__, static_folder="static", static_url_path="/styles")
    app.config["SECRET_KEY"] = settings.secret_key
    app.extensions[STORE_KEY] = store if store is not None else AlbumStore.from_settings(settings)

    app.add_url_rule("/", "search", search, methods=["GET", "POST"])
    app.add_url_rule("/add", "add", add, methods=["GET", "POST"])
    app.add_url_rule("/delete", "delete", delete, methods=["GET", "POST"])
    app.add_url_rule("/edit", "edit", edit, methods=["GET", "POST"])
    app.add_url_rule("/dump", "dump", dump)
    app.add_url_rule("/healthz", "healthz", healthz)

    app.register_error_handler(ValidationError, _handle_validation_error)
    app.register_error_handler(AlbumNotFound, _handle_not_found)
    app.register_error_handler(StorageError, _handle_storage_error)

    @app.template_filter("money")
    def _money(value) -> str:
        return f"{value:.2f}"

    return app


__all__ = ["create_app"]
