"""
Prefect flows for the dashboard.

Flows:
- refresh: Fetch every source and write the static dashboard page

Usage (local):
    python -m localdash.flows.refresh
    localdash refresh

Usage (Prefect):
    prefect server start  # Optional, for the Prefect UI
    python -m localdash.flows.refresh
"""
