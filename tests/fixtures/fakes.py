from typing import Dict, List, Optional

from src.app.services.object_storage import IObjectStorage, StorageError
from src.app.services.outbound import IOutboundDispatcher, OutboundKind, OutboundTask


class InMemoryObjectStorage(IObjectStorage):
    def __init__(self, fail_on_put: bool = False, fail_on_get: bool = False):
        self.objects: Dict[str, bytes] = {}
        self.fail_on_put = fail_on_put
        self.fail_on_get = fail_on_get

    async def put(self, key: str, data: bytes, content_type: Optional[str] = None) -> None:
        if self.fail_on_put:
            raise StorageError("disk full")
        self.objects[key] = data

    async def get(self, key: str) -> Optional[bytes]:
        if self.fail_on_get:
            raise StorageError("read error")
        return self.objects.get(key)

    async def delete(self, key: str) -> bool:
        return self.objects.pop(key, None) is not None

    async def exists(self, key: str) -> bool:
        return key in self.objects


class RecordingDispatcher(IOutboundDispatcher):
    def __init__(self):
        self.tasks: List[OutboundTask] = []

    def enqueue(self, task: OutboundTask) -> None:
        self.tasks.append(task)

    def kinds(self) -> List[OutboundKind]:
        return [task.kind for task in self.tasks]
