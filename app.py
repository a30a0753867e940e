#!/usr/bin/env python3
"""
Flask Web Application for Monitor Present
Serves the introspection endpoints of this process's default monitoring registry.

Endpoints (mounted at MONITOR_PRESENT_URL_PREFIX, default /mon):
  - /ps[/text|/dot|/json]        running spans
  - /funcs[/text|/dot|/json]     monitored functions
  - /stats[/text|/json]?prefix=  flat stats
  - /trace/svg|json?regex=&trace_id=&preselect=  next matching trace
"""

import logging

from monitor_present import PresentConfig, default_registry
from monitor_present.web import create_app

config = PresentConfig.from_env()
app = create_app(default_registry(), config)


if __name__ == '__main__':
    logging.basicConfig(
        level=logging.DEBUG if config.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    app.run(debug=config.debug, host=config.host, port=config.port)
