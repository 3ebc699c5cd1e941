from prometheus_client import Counter, Histogram, Gauge, REGISTRY


# we check if they are already registered to avoid errors during hot reloads or test runs
def get_or_create_metric(name, documentation, metric_type, **kwargs):
    try:
        return metric_type(name, documentation, **kwargs)
    except ValueError:
        return REGISTRY._names_to_collectors[name]


CYCLES_TOTAL = get_or_create_metric(
    "solar_cycles_total",
    "Control cycles by outcome",
    Counter,
    labelnames=["outcome"],
)

CYCLE_LATENCY_SECONDS = get_or_create_metric(
    "solar_cycle_latency_seconds",
    "End-to-end control cycle latency",
    Histogram,
)

EFFECTIVE_PRICE_EUR = get_or_create_metric(
    "solar_effective_price_eur",
    "Last effective feed-in price (market price + fee) in EUR/kWh",
    Gauge,
)

COMMANDS_PUBLISHED_TOTAL = get_or_create_metric(
    "solar_commands_published_total",
    "Relay commands published",
    Counter,
    labelnames=["command"],
)
