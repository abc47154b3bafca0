# processing/cache.py
import logging
from collections import OrderedDict

from config import CACHE_DECIMALS, CACHE_SIZE
from fuzzy.mamdani import mamdani_infer

log = logging.getLogger(__name__)


class InferenceCache:
    """
    Memoizes inference for repeated, visually identical metrics.

    Metrics are rounded to `decimals` before both lookup and inference, so a
    cached answer is exactly what a fresh call through the cache would give.
    Least recently used entries are evicted beyond `maxsize`.
    """

    def __init__(self, decimals=CACHE_DECIMALS, maxsize=CACHE_SIZE, infer=mamdani_infer):
        self.decimals = decimals
        self.maxsize = maxsize
        self._infer = infer
        self._entries = OrderedDict()
        self.hits = 0
        self.misses = 0

    def key(self, metrics):
        return tuple(metrics.rounded(self.decimals).as_dict().values())

    def get(self, metrics):
        k = self.key(metrics)
        if k in self._entries:
            self._entries.move_to_end(k)
            self.hits += 1
            return self._entries[k]

        self.misses += 1
        result = self._infer(metrics.rounded(self.decimals))
        self._entries[k] = result
        if len(self._entries) > self.maxsize:
            self._entries.popitem(last=False)
        return result

    def clear(self):
        log.debug(f"clearing {len(self._entries)} cached inferences")
        self._entries.clear()

    def __len__(self):
        return len(self._entries)
