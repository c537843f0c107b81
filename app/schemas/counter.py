from pydantic import BaseModel, Field


class IPCount(BaseModel):
    """Request count for one client IP"""
    ip: str = Field(..., description="Client IP address")
    count: int = Field(..., ge=0, description="Requests seen from this IP")

    def __str__(self) -> str:
        return f"{self.ip}: {self.count}"
