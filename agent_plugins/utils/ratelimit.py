# agent_plugins/utils/ratelimit.py
import os
import time
import threading
from collections import deque
import requests

# Requests per second allowed against any single upstream host
# (GoPlus, CoinGecko, DexScreener, DefiLlama, Google). Override with HTTP_MAX_QPS.
DEFAULT_QPS = float(os.getenv("HTTP_MAX_QPS", "4.0") or 4.0)
DEFAULT_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "15") or 15)

USER_AGENT = "crypto-agent-plugins/0.1"

# One limiter per host key (e.g. 'goplus', 'coingecko', 'defillama')
_LIMITERS = {}
_LOCK = threading.Lock()


class RateLimiter:
    """
    Sliding one-second window shared by every thread that talks to the same
    upstream. Batch security checks run GoPlus lookups from a thread pool, and
    GoPlus, CoinGecko and Google all throttle per key, so callers block here
    instead of collecting 429s.
    """

    def __init__(self, max_per_sec: float):
        self.max_per_sec = max(0.1, float(max_per_sec))
        self.window = deque()
        self.lock = threading.Lock()

    def _trim(self, now: float):
        while self.window and now - self.window[0] > 1.0:
            self.window.popleft()

    def wait(self):
        with self.lock:
            self._trim(time.monotonic())
            if len(self.window) >= self.max_per_sec:
                # sleep until the oldest call leaves the window
                pause = 1.0 - (time.monotonic() - self.window[0]) + 0.001
                if pause > 0:
                    time.sleep(pause)
                self._trim(time.monotonic())
            self.window.append(time.monotonic())


def _get_limiter(host_key: str, max_qps: float | None) -> RateLimiter:
    with _LOCK:
        qps = DEFAULT_QPS if max_qps is None else float(max_qps)
        lim = _LIMITERS.get(host_key)
        if lim is None or lim.max_per_sec != max(0.1, qps):
            lim = RateLimiter(qps)
            _LIMITERS[host_key] = lim
        return lim


def _get(host_key: str, url: str, params: dict | None, headers: dict | None,
         max_qps: float | None, timeout: float | None) -> requests.Response:
    lim = _get_limiter(host_key, max_qps)
    lim.wait()
    hdrs = {"User-Agent": USER_AGENT}
    hdrs.update(headers or {})
    print(f"[HTTP] GET {host_key} {url}")
    resp = requests.get(url, params=params, headers=hdrs, timeout=timeout or DEFAULT_TIMEOUT)
    resp.raise_for_status()
    return resp


def http_get_json(host_key: str, url: str, params: dict | None = None, headers: dict | None = None,
                  max_qps: float | None = None, timeout: float | None = None):
    """
    Single rate-limited GET. Returns response.json() or raises
    requests.RequestException (HTTPError on non-2xx). No retries.
    """
    return _get(host_key, url, params, headers, max_qps, timeout).json()


def http_get_text(host_key: str, url: str, params: dict | None = None, headers: dict | None = None,
                  max_qps: float | None = None, timeout: float | None = None) -> str:
    """Same as http_get_json but returns the decoded body (HTML pages)."""
    return _get(host_key, url, params, headers, max_qps, timeout).text


def set_default_qps(qps: float):
    global DEFAULT_QPS
    DEFAULT_QPS = max(0.1, float(qps))


def expect_shape(payload, kind: type, source: str):
    """Return payload if it is a `kind` (dict/list); otherwise ValueError naming the upstream."""
    if not isinstance(payload, kind):
        raise ValueError(f"unexpected response from {source}: expected a JSON "
                         f"{'object' if kind is dict else 'array'}, got {type(payload).__name__}")
    return payload
