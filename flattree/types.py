from typing import Any, NotRequired, TypedDict


class BulkNodeData(TypedDict):
    """Structure of a dumped forest node.

    Note: When ``keep_ids=True``, the primary key value is stored under
    ``id`` alongside "data" and "children".
    """

    data: dict[str, Any]
    id: NotRequired[Any]
    children: NotRequired[list["BulkNodeData"]]
