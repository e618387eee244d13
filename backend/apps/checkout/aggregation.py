from __future__ import annotations

from collections import OrderedDict
from dataclasses import replace
from typing import Dict, Iterable

from .dtos import AggregatedEntry, LineEntry


def aggregate_entries(entries: Iterable[LineEntry]) -> Dict[str, AggregatedEntry]:
    """
    Collapse line entries sharing a name into one entry with summed quantity.

    The first entry seen for a name supplies the price and image; later
    duplicates only contribute their quantity. Input is assumed validated.
    """
    merged: "OrderedDict[str, AggregatedEntry]" = OrderedDict()
    for entry in entries:
        current = merged.get(entry.name)
        if current is None:
            merged[entry.name] = AggregatedEntry(
                name=entry.name,
                unit_price=entry.unit_price,
                quantity=entry.quantity,
                image_url=entry.image_url,
            )
        else:
            merged[entry.name] = replace(current, quantity=current.quantity + entry.quantity)
    return merged
