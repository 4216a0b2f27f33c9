# pbi_recon/tools/recon/formatters.py
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from .dto import FilterEcho, MetaInfo, ReconQuery, ReconResult


def build_filter_echo(q: ReconQuery) -> FilterEcho:
    return FilterEcho(
        order_status=q.order_status,
        time_grain=q.time_grain,
        dataset=q.dataset,
        field=q.field,
        metadata_filter=q.metadata_filter.model_dump(by_alias=True, exclude_none=True),
        locale=q.locale,
        currency=q.currency,
    )


def build_meta(row_count: int, locale: str, currency: str) -> MetaInfo:
    ts = datetime.now(tz=timezone.utc).isoformat(timespec="seconds")
    return MetaInfo(row_count=row_count, generated_at=ts, currency=currency, locale=locale)


def to_result(q: ReconQuery, data: List[Dict[str, Any]], warnings: Optional[List[str]] = None) -> ReconResult:
    filters = build_filter_echo(q)
    meta = build_meta(row_count=len(data), locale=filters.locale, currency=filters.currency)
    return ReconResult(ok=True, mode=q.mode, filters=filters, warnings=warnings or [], meta=meta, data=data)


def to_error(q: ReconQuery, message: str) -> ReconResult:
    filters = build_filter_echo(q)
    meta = build_meta(row_count=0, locale=filters.locale, currency=filters.currency)
    return ReconResult(ok=False, mode=q.mode, filters=filters, meta=meta, data=[], error=message)
