import threading


class ClientCache():
    """
    Sender address -> FirstStageClient.

    Append only: entries are never replaced or removed. Creation is guarded so that concurrent
    lookups for the same sender build at most one client.
    """

    def __init__(self) -> None:
        self._clients = {}
        self._lock = threading.Lock()

    def get_or_create(self, sender: str, factory):
        client = self._clients.get(sender)
        if client is not None:
            return client

        with self._lock:
            client = self._clients.get(sender)
            if client is None:
                client = factory()
                self._clients[sender] = client
        return client

    def __contains__(self, sender):
        return sender in self._clients

    def __len__(self):
        return len(self._clients)
