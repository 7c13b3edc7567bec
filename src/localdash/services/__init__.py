"""
Shared service utilities.

- http.py - requests session without retries, typed GET helpers
- log.py  - logging setup for the CLI and flows
"""
