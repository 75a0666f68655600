from prometheus_client import Counter, Histogram

TABLE_RENDER_COUNT = Counter(
    "table_renders_total",
    "Total table renders",
    ["table_key"],
)
TABLE_RENDER_LATENCY = Histogram(
    "table_render_duration_seconds",
    "Table fetch and render latency",
    ["table_key"],
)
TABLE_EVENT_COUNT = Counter(
    "table_events_total",
    "Table interaction events applied",
    ["table_key", "event"],
)


def observe_render(table_key: str, duration: float) -> None:
    TABLE_RENDER_COUNT.labels(table_key=table_key).inc()
    TABLE_RENDER_LATENCY.labels(table_key=table_key).observe(duration)
