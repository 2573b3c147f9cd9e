from .on_http_request import requests_metric_middleware


def register_middlewares(app):
    app.middleware("http")(requests_metric_middleware)
