"""健康检查结果类型。"""

from enum import StrEnum

from pydantic import BaseModel, Field


class HealthStatus(StrEnum):
    OK = "ok"
    ERROR = "error"


class DatabaseHealthResult(BaseModel):
    """数据库健康检查结果。"""

    status: HealthStatus
    connected: bool
    version: str | None = Field(None, description="PostgreSQL 版本")
    error: str | None = None


class HealthReport(BaseModel):
    """/health 响应：数据库不可用即为 unhealthy。"""

    status: str
    environment: str
    version: str
    components: dict[str, DatabaseHealthResult]

    @classmethod
    def from_database(
        cls, database: DatabaseHealthResult, environment: str, version: str
    ) -> "HealthReport":
        return cls(
            status="healthy" if database.status is HealthStatus.OK else "unhealthy",
            environment=environment,
            version=version,
            components={"database": database},
        )
