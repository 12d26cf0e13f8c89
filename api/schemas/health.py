# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-10
# Description: health.py
# -----------------------------------------------------------------------------
from pydantic import BaseModel

class HealthResponse(BaseModel):
    status: str
    message: str
