"""
prism_neo.billing

Billing and wallet presentation.

Responsibilities:
- Timestamp/time-range formatting for chat replies.
- The pending-logout confirmation store.
- Rendering billing previews, logout receipts, wallet and item reports.
"""

# Package marker.
