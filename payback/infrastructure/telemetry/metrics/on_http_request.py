from opentelemetry import metrics


meter = metrics.get_meter("app.metrics")
AUTH_PATH = '/auth/login'
ACCOUNT_MUTATION_METHODS = frozenset({"PATCH", "DELETE"})
ACCOUNT_PATH_PREFIX = '/users'


http_requests_total = meter.create_counter(
    "http_requests_total",
    description="Total HTTP requests",
)

auth_logins_total = meter.create_counter(
    "auth_logins_total",
    description="Number of login attempts",
)

account_mutations_total = meter.create_counter(
    "account_mutations_total",
    description="Number of verify-then-mutate account requests",
)


def _outcome(status_code: int) -> str:
    if status_code < 400:
        return "success"
    if status_code == 401:
        return "unauthorized"
    return "failure"


async def requests_metric_middleware(request, call_next):
    response = await call_next(request)

    route_path = getattr(request.scope.get("route"), "path", request.url.path)
    http_requests_total.add(
        1,
        {
            "http_method": request.method,
            "http_target": route_path,
            "status_code": str(response.status_code),
        },
    )
    if route_path == AUTH_PATH:
        auth_logins_total.add(1, {"status": _outcome(response.status_code)})
    elif request.method in ACCOUNT_MUTATION_METHODS and route_path.startswith(ACCOUNT_PATH_PREFIX):
        account_mutations_total.add(1, {"http_target": route_path, "status": _outcome(response.status_code)})

    return response
