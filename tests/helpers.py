import threading

from areascan.models import TaggedElement


def node(**tags):
    return TaggedElement(kind="node", tags=tags, lat=12.97, lon=77.59)


def way(**tags):
    return TaggedElement(kind="way", tags=tags)


class FakeSource:
    """In-memory element source keyed by which fetch is being made"""

    def __init__(self, config, responses):
        self.config = config
        self.responses = responses
        self.calls = []
        self._lock = threading.Lock()

    def group_of(self, filters):
        filters = tuple(filters)
        if filters == tuple(self.config.gap.fetch_filters):
            return "gap"
        for name, specs in self.config.accessibility.groups():
            if filters == tuple(spec.tag_filter for spec in specs):
                return name
        raise AssertionError(f"Unexpected filters: {filters}")

    def fetch_elements(self, center, radius_m, filters, limit=None):
        group = self.group_of(filters)
        with self._lock:
            self.calls.append((group, center, radius_m, limit))
        response = self.responses.get(group, [])
        if isinstance(response, Exception):
            raise response
        return list(response)
