#!/usr/bin/env python3
"""
Log Entry Examples

Demonstrates building log entries from awkward values:
- Cyclic object graphs and byte buffers
- Exceptions with their location and stack
- Request/response objects reduced to a few fields
- Custom shapes and the logging integration
"""

import json
import re

from logentry import (
    EntryConfig,
    LogEntry,
    get_logger,
    log_with_context,
    register_shape,
    request_context,
)


class Money:
    def __init__(self, amount, currency):
        self.amount = amount
        self.currency = currency


class Request:
    def __init__(self):
        self.method = "POST"
        self.url = "/checkout"
        self.headers = {"Content-Type": "application/json"}
        self.remote_addr = "203.0.113.5"
        self.session = {"request": self}


def charge(order):
    raise ValueError(f"card declined for order {order['id']}")


def main():
    config = EntryConfig()

    # Cyclic graphs and buffers
    order = {"id": 17, "payload": b"\x00" * 512, "pattern": re.compile("^ord-\\d+$")}
    order["self"] = order

    entry = LogEntry("checkout", config)
    entry.add_message_args(["processing order", order["id"]])
    entry.add_data({"order": order, "request": Request()})

    # Exceptions become message text plus structured details
    try:
        charge(order)
    except ValueError as e:
        entry.add_details(["charge failed:", e])

    print(json.dumps(entry.to_dict(), indent=2))

    # Custom shapes
    register_shape(
        "money",
        lambda obj: isinstance(obj, Money),
        lambda obj: f"{obj.amount} {obj.currency}",
        leaf=True,
    )

    # Logging integration
    logger = get_logger("checkout", config)
    with request_context("tenant:acme"):
        log_with_context(
            logger, "info", "order total", details=["discount applied"], total=Money("9.99", "EUR")
        )


if __name__ == "__main__":
    main()
