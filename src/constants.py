"""Constants and tuning values for SmartTunnel core."""

import os

__version__ = "0.3.0"

# probes
INTRANET_PROBE_TIMEOUT = 2.0
IPV6_PROBE_TIMEOUT = 3.0
DEFAULT_INTRANET_TEST_URL = "http://intranet-test-resource/"
IPV6_TEST_URL = "https://ipv6.lookup.test-ipv6.com/ip/"
NO_IPV6_MARKER = "No IPv6 address detected"
PROBE_MAX_BODY = 65536

# storage
DEFAULT_STORE_FILE = os.path.join(os.path.expanduser("~"), ".smarttunnel.json")
WHITELIST_KEY = "smarttunnel_whitelist"
INTRANET_TEST_URL_KEY = "smarttunnel_intranetTestUrl"

URL_SCHEMES = ("http://", "https://", "ftp://")
DEFAULT_SCHEME = "http://"
