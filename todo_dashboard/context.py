from dataclasses import dataclass
from datetime import tzinfo
from typing import Optional

from todo_dashboard.data.api_client import TaskStoreClient


@dataclass
class DashboardContext:
    client: TaskStoreClient
    user_id: str
    user_name: str
    today_key: str
    timezone: Optional[tzinfo] = None
