from pydantic import BaseModel, Field
from typing import Dict, List, Optional
from enum import Enum

class StatusEnum(str, Enum):
    SUCCESS = "success"
    ERROR = "error"

class AnalyzeRequest(BaseModel):
    urls: Optional[List[str]] = Field(None, description="URLs to summarize; only the first 10 are processed")

    model_config = {
        "json_schema_extra": {
            "example": {
                "urls": ["https://example.com", "https://www.python.org"]
            }
        }
    }

class AnalysisResultEntry(BaseModel):
    status: StatusEnum = Field(..., description="Outcome of fetching and summarizing the URL")
    summary: str = Field(..., description="Seven-word summary or a fallback message")
    error: Optional[str] = Field(None, description="Failure reason, present only when status is error")

    model_config = {
        "json_schema_extra": {
            "example": {
                "status": "success",
                "summary": "Example domain reserved for documentation and testing"
            }
        }
    }

class AnalyzeResponse(BaseModel):
    results: Dict[str, AnalysisResultEntry] = Field(..., description="Result entry per requested URL")

    model_config = {
        "json_schema_extra": {
            "example": {
                "results": {
                    "https://example.com": {
                        "status": "success",
                        "summary": "Example domain reserved for documentation and testing"
                    },
                    "https://unreachable.invalid": {
                        "status": "error",
                        "error": "timeout of 10000ms exceeded",
                        "summary": "Could not access or analyze this site"
                    }
                }
            }
        }
    }

class ErrorResponse(BaseModel):
    error: str = Field(..., description="Human-readable error message")

    model_config = {
        "json_schema_extra": {
            "example": {
                "error": "Please provide an array of URLs to analyze"
            }
        }
    }

class HealthResponse(BaseModel):
    status: str = Field(..., description="Service status")
    version: str = Field(..., description="Application version")
