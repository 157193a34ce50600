from pydantic import BaseModel


class HealthCheck(BaseModel):
    status: str
    llm_configured: bool
