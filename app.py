import logging
import sys
import traceback
from typing import Optional
from xml.etree import ElementTree as ET

from flask import Flask, Response, abort, jsonify, render_template, request, send_from_directory

from color_util import format_hex, parse_color
from colorizer import NotPaintableError, colorize_svg
from config import ConfigError, Settings, load_settings
from gallery import IconCache, build_icons, load_icon_sources, render_icons
from svg_doc import parse_svg, to_markup

logger = logging.getLogger(__name__)


def create_app(settings: Settings, cache: Optional[IconCache] = None) -> Flask:
    static_dir = str(settings.root / "static")
    # the index pages are templates so the picker starts at the configured color
    app = Flask(__name__, static_folder=None, template_folder=static_dir)
    cache = cache or IconCache(lambda: load_icon_sources(settings))

    def target_color(value) -> str:
        color = value or settings.default_color
        if not isinstance(color, str) or parse_color(color) is None:
            abort(400, description=f"Unsupported color {color!r}, use #rrggbb, #rgb or rgb(r, g, b)")
        return color

    # define routes
    ################################################################
    @app.route("/")
    def index():
        picker_color = format_hex(parse_color(target_color(request.args.get("color"))))
        if settings.debug is True:
            return render_template("dev-index.html", picker_color=picker_color)
        else:
            return render_template("index.html", picker_color=picker_color)

    @app.route("/icons")
    def icons():
        color = target_color(request.args.get("color"))
        rendered = build_icons(cache.get(), color, settings.svg_size)
        logger.info("Rendered %d icons toward %s", len(rendered), color)
        return Response(render_icons(rendered), mimetype="text/html")

    @app.route("/recolor", methods=["POST"])
    def recolor_svg():
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            abort(400, description="Expected a JSON object with 'svg' and 'color'")
        svg = payload.get("svg")
        if not isinstance(svg, str):
            abort(400, description="Missing 'svg' markup")
        color = target_color(payload.get("color"))
        try:
            doc = parse_svg(svg)
        except ET.ParseError as e:
            abort(400, description=f"Invalid SVG: {e}")
        try:
            changed = colorize_svg(doc, color)
        except NotPaintableError as e:
            abort(422, description=str(e))
        return jsonify(svg=to_markup(doc), changed=changed)

    @app.route("/<path:path>")
    def static_proxy(path: str):
        return send_from_directory(static_dir, path)

    return app


# run the server
################################################################
if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        settings = load_settings()
    except ConfigError as e:
        print(f"Invalid config. Make sure config.txt is 'key=value' pairs, one per line.\n{e}")
        sys.exit(1)
    try:
        app = create_app(settings)
        print(f"\nStarting icon recolor server at http://{settings.host}:{settings.port}\nQuit at any time with Ctrl+C.\n")
        app.run(host=settings.host, port=settings.port, debug=settings.debug)
        sys.exit(0)
    except Exception:
        print("Failed to run server.\n" + traceback.format_exc())
        sys.exit(1)
