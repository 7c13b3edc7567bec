"""Huxley 2 (National Rail Darwin JSON proxy) constants.

Docs: https://huxley2.azurewebsites.net
"""

DEFAULT_API = "https://huxley2.azurewebsites.net"

#: Departures path: station CRS code and number of rows.
DEPARTURES_PATH = "/departures/{station}/{rows}"

# Destination keywords per direction, checked in this order
CARDIFF_BOUND_TOWNS = ("Cardiff", "Caerphilly", "Pontypridd", "Treherbert")
BRIDGEND_BOUND_TOWNS = ("Bridgend", "Swansea")
