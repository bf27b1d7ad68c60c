"""JSON schema definition for reporter output."""
from __future__ import annotations

SCHEMA_VERSION = "1.0.0"

VERDICTS = ["AC", "WA", "TLE", "ERR", "GEN", "SKIP"]

JSON_SCHEMA_V1 = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "harn report",
    "type": "object",
    "required": ["schema_version", "generated_at", "mode", "program", "pattern", "summary", "cases"],
    "properties": {
        "schema_version": {"type": "string"},
        "generated_at": {"type": "string", "format": "date-time"},
        "mode": {"type": "string", "enum": ["check", "generate"]},
        "program": {"type": "string"},
        "pattern": {"type": "string"},
        "hash_mode": {"type": "boolean"},
        "timeout_s": {"type": "number", "minimum": 0},
        "summary": {
            "type": "object",
            "required": ["total", "passed", "failed", "total_time_s", "average_time_s"],
            "properties": {
                "total": {"type": "integer", "minimum": 0},
                "passed": {"type": "integer", "minimum": 0},
                "failed": {"type": "integer", "minimum": 0},
                "accepted": {"type": "integer", "minimum": 0},
                "wrong": {"type": "integer", "minimum": 0},
                "timed_out": {"type": "integer", "minimum": 0},
                "errors": {"type": "integer", "minimum": 0},
                "generated": {"type": "integer", "minimum": 0},
                "skipped": {"type": "integer", "minimum": 0},
                "total_time_s": {"type": "number", "minimum": 0},
                "average_time_s": {"type": "number", "minimum": 0},
            },
        },
        "cases": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["input", "expected", "verdict", "detail"],
                "properties": {
                    "input": {"type": "string"},
                    "expected": {"type": "string"},
                    "verdict": {"type": "string", "enum": VERDICTS},
                    "detail": {"type": "string"},
                    "elapsed_ms": {"type": ["number", "null"]},
                },
            },
        },
    },
}
