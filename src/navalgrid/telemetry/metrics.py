"""Metrics helpers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Mapping

from opentelemetry import metrics as otel_metrics
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter
from opentelemetry.metrics import Counter, Meter
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import (
    ConsoleMetricExporter,
    PeriodicExportingMetricReader,
)
from opentelemetry.sdk.resources import Resource

if TYPE_CHECKING:  # pragma: no cover
    from .config import TelemetryConfig

_METER_PROVIDER: MeterProvider | None = None
_METER: Meter | None = None
_INSTRUMENTS: dict[str, Counter] = {}

MetricAttributes = Mapping[str, str | bool | int | float]


def get_meter(name: str = "navalgrid") -> Meter:
    global _METER
    if _METER is None:
        _METER = otel_metrics.get_meter(name)
    return _METER


def init_metrics(config: TelemetryConfig) -> Meter:
    global _METER_PROVIDER, _METER, _INSTRUMENTS

    if config.otlp_metrics_endpoint:
        exporter = OTLPMetricExporter(endpoint=config.otlp_metrics_endpoint, insecure=True)
    else:
        exporter = ConsoleMetricExporter()
    reader = PeriodicExportingMetricReader(exporter, export_interval_millis=5000)

    provider = MeterProvider(
        resource=Resource.create(config.resource_dict()), metric_readers=[reader]
    )
    otel_metrics.set_meter_provider(provider)

    _METER_PROVIDER = provider
    _METER = provider.get_meter(config.service_name)
    _INSTRUMENTS = {}
    return _METER


def record_placement_metric(
    name: str, value: float, attrs: MetricAttributes | None = None
) -> None:
    """Add ``value`` to the counter ``name``, creating it on first use."""
    instrument = _INSTRUMENTS.get(name)
    if instrument is None:
        instrument = get_meter().create_counter(name, unit="1")
        _INSTRUMENTS[name] = instrument
    instrument.add(value, attributes=attrs or {})


def shutdown_metrics() -> None:
    """Export outstanding measurements and stop the periodic reader."""
    global _METER_PROVIDER, _METER, _INSTRUMENTS
    if _METER_PROVIDER is None:
        return
    _METER_PROVIDER.force_flush()
    _METER_PROVIDER.shutdown()
    _METER_PROVIDER = None
    _METER = None
    _INSTRUMENTS = {}
