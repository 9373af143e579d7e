"""
Sentinel
API Security Scanner (passive + light active checks)

Probes a target API with a small, bounded set of requests and reports
heuristic security signals. It is not a fuzzer and sends no exploit payloads.

Licensed under MIT License
"""

__version__ = "0.1.0"
__author__ = "Sentinel Contributors"
__description__ = "CLI API security scanner (passive + active checks)"

# Ethical usage reminder
ETHICAL_NOTICE = """
⚠️  AUTHORIZED TESTING ONLY ⚠️
Only scan APIs you own or have explicit permission to test.
Sentinel keeps request volume low, but it still talks to a live system.
"""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())
