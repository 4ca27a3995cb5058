"""Flask front end for the DOM analyzer.

Serves the textarea page (paste markup, click "Analyze DOM", see the tree) and
a JSON endpoint exposing the same analysis.
"""

from typing import Optional

from flask import Flask, jsonify, render_template_string, request

from dom_analyzer.api import DomAnalyzer
from dom_analyzer.shared import AnalyzerConfig, get_logger
from dom_analyzer.tree.formatters import to_html

PLACEHOLDER = 'Paste HTML and click "Analyze DOM" to see the structure'

PAGE_TEMPLATE = """<!doctype html>
<html>
<head>
<meta charset="utf-8">
<title>{{ title }}</title>
<script src="https://cdn.tailwindcss.com"></script>
</head>
<body>
<div class="min-h-screen bg-gray-100 flex">
  <div class="w-1/2 p-6 bg-white shadow-lg">
    <h2 class="text-2xl font-bold mb-4 text-center">{{ title }}</h2>
    <form method="post" action="{{ url_for('analyze_form') }}">
      <div class="mb-4">
        <textarea name="markup"
          class="w-full h-96 p-3 border rounded focus:outline-none focus:ring-2 focus:ring-blue-500 resize-none"
          placeholder="Paste your HTML code here...">{{ markup }}</textarea>
      </div>
      <button type="submit"
        class="w-full bg-blue-500 text-white py-3 rounded hover:bg-blue-600 transition">
        Analyze DOM
      </button>
    </form>
    {% if error %}
    <div id="error" class="mt-4 p-3 bg-red-100 text-red-800 rounded">{{ error }}</div>
    {% endif %}
  </div>
  <div class="w-1/2 p-6 bg-gray-50">
    <h3 class="text-xl font-bold mb-4 text-center">DOM Hierarchy Visualization</h3>
    <div id="tree" class="bg-white p-4 rounded-lg shadow-md max-h-[calc(100vh-100px)] overflow-auto">
      {% if tree_html is not none %}
      {{ tree_html | safe }}
      {% else %}
      <div class="text-center text-gray-500">{{ placeholder }}</div>
      {% endif %}
    </div>
  </div>
</div>
</body>
</html>
"""


def create_app(config: Optional[AnalyzerConfig] = None) -> Flask:
    """Create the Flask application.

    Args:
        config: Analyzer configuration shared by every request

    Returns:
        Configured Flask application
    """
    config = config or AnalyzerConfig()
    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = config.web.max_content_length
    app.config["ANALYZER_CONFIG"] = config
    logger = get_logger(__name__, None, "web")

    def render_page(markup: str = "", tree_html: Optional[str] = None,
                    error: Optional[str] = None) -> str:
        return render_template_string(
            PAGE_TEMPLATE,
            title=config.web.title,
            markup=markup,
            tree_html=tree_html,
            error=error,
            placeholder=PLACEHOLDER,
        )

    @app.route("/", methods=["GET"])
    def index():
        return render_page()

    @app.route("/analyze", methods=["POST"])
    def analyze_form():
        markup = request.form.get("markup", "")
        # One session per request: nothing from an earlier submission survives
        result = DomAnalyzer(config).analyze(markup)
        if not result.success:
            return render_page(markup=markup, error=result.error)
        return render_page(markup=markup, tree_html=to_html(result.units, config.render))

    @app.route("/api/analyze", methods=["POST"])
    def analyze_api():
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict) or not isinstance(payload.get("markup"), str):
            return jsonify({"error": 'Request body must be JSON with a "markup" string'}), 400

        result = DomAnalyzer(config).analyze(payload["markup"])
        if not result.success:
            logger.info("Rejected analysis request", extra={"reason": result.error})
            return jsonify({"error": result.error, "correlation_id": result.correlation_id}), 400

        body = result.to_dict()
        body["html"] = to_html(result.units, config.render)
        return jsonify(body)

    return app


def run_server(config: Optional[AnalyzerConfig] = None) -> None:
    """Run the development server with the configured host and port."""
    config = config or AnalyzerConfig()
    app = create_app(config)
    app.run(host=config.web.host, port=config.web.port, debug=config.web.debug)
