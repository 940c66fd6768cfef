class Context:
    """Shared store for all tests of a suite run"""

    def __init__(self):
        self._store = {}

    def set(self, values):
        """Merge values into the store. Existing keys are replaced."""
        self._store.update(values)

    def get(self):
        return self._store

    def __getitem__(self, key):
        return self._store[key]

    def __contains__(self, key):
        return key in self._store
