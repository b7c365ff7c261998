"""Test helpers shared across the cloudmcp test suite."""

from __future__ import annotations

from typing import Any

SAMPLE_INVENTORY: dict[str, Any] = {
    "subscriptions": [
        {
            "id": "sub-1",
            "name": "Development",
            "resource_groups": ["rg-app", "rg-data"],
            "storage": {
                "stacct": {
                    "tables": ["audit", "events"],
                    "containers": {
                        "logs": {
                            "properties": {"publicAccess": "none", "leaseState": "available"},
                            "blobs": ["2024/01/app.log", "2024/02/app log.txt"],
                        },
                        "data": {"blobs": []},
                    },
                },
                "archive": {"tables": [], "containers": {}},
            },
            "cosmos": {
                "cosmo": {
                    "databases": {
                        "appdb": {
                            "containers": {
                                "orders": {"items": [{"id": "1", "total": 10}]},
                                "users": {"items": []},
                            }
                        }
                    }
                }
            },
            "monitor": {
                "workspaces": {
                    "ws-main": {
                        "resource_group": "rg-app",
                        "customer_id": "cust-1",
                        "tables": {"CustomLog": ["AppEvents_CL"], "AzureMetrics": ["Metrics"]},
                        "logs": {
                            "AppEvents_CL": [{"msg": "a"}, {"msg": "b"}, {"msg": "c"}],
                        },
                    }
                }
            },
            "appconfig": {
                "cfgstore": {
                    "key_values": [
                        {"key": "color", "value": "blue", "label": None, "locked": False},
                        {"key": "mode", "value": "prod", "label": "live", "locked": True},
                    ]
                }
            },
        },
        {"id": "sub-2", "name": "Production"},
    ]
}


def argument_named(arguments: list[Any], name: str) -> Any:
    """Return the argument record called ``name`` from a response."""
    return next(info for info in arguments if info.name == name)
