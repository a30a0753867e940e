"""
Flask front end serving the introspection endpoints.
"""

import io
import logging
from typing import Optional

from flask import Blueprint, Flask, Response, current_app, jsonify, request

from .. import environment
from ..core import PresentConfig, PresentError, from_request
from ..registry import Registry, default_registry

logger = logging.getLogger(__name__)

CONFIG_KEY = 'MONITOR_PRESENT'


def create_blueprint(registry: Registry) -> Blueprint:
    """
    Blueprint routing every path beneath its mount point to the dispatcher.

    Args:
        registry: Registry the endpoints present

    Returns:
        Flask Blueprint
    """
    bp = Blueprint('monitor_present', __name__)

    @bp.route('/', defaults={'path': ''})
    @bp.route('/<path:path>')
    def present(path):
        """
        Render a registry view.

        Query parameters are passed through to the dispatcher: 'prefix' for
        stats, 'regex', 'trace_id' and 'preselect' for traces.
        """
        config = current_app.config[CONFIG_KEY]
        producer, content_type = from_request(
            registry, path, request.args, trace_timeout=config.trace_timeout)
        sink = io.StringIO()
        producer.produce(sink)
        return Response(sink.getvalue(), content_type=content_type)

    @bp.errorhandler(PresentError)
    def present_error(error):
        logger.warning("%s %s: %s", request.method, request.full_path, error)
        return jsonify(error.to_dict()), error.status

    @bp.errorhandler(TimeoutError)
    def trace_timeout(error):
        logger.warning("%s %s: %s", request.method, request.full_path, error)
        return jsonify({'error': str(error), 'kind': 'Gateway Timeout', 'status': 504}), 504

    @bp.errorhandler(Exception)
    def internal_error(error):
        logger.exception("error rendering %s", request.full_path)
        return jsonify({'error': str(error), 'kind': 'Internal Error', 'status': 500}), 500

    return bp


def create_app(registry: Optional[Registry] = None, config: Optional[PresentConfig] = None) -> Flask:
    """
    Build a Flask application presenting registry.

    Args:
        registry: Registry to present; defaults to the process-wide registry
        config: PresentConfig; defaults to one read from the environment

    Returns:
        Flask application with the endpoints mounted at config.url_prefix
    """
    config = config if config is not None else PresentConfig.from_env()
    registry = registry if registry is not None else default_registry()

    if config.register_runtime:
        environment.register(registry)

    app = Flask(__name__)
    app.config[CONFIG_KEY] = config
    app.register_blueprint(create_blueprint(registry), url_prefix=config.url_prefix or None)
    return app
