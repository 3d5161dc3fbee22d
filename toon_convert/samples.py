"""
Sample data sets for comparing JSON and Toon.

Built-in sets cover the common shapes: a flat user list, an e-commerce order,
a paginated API response, a configuration file, a nested company record and a
100-record table. Extra sets can be loaded from JSON files:

    {"mySet": {...}, "other": [...]}

Files are found by path, or by name in ./sample_packs/ under the working
directory and then in the packs bundled with the package.
"""

import json
import logging
import os
import random
import re
from typing import List, Optional

logger = logging.getLogger(__name__)

PACK_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "sample_packs")

COUNTRIES = ["USA", "UK", "Canada", "Australia", "Germany"]


def large_dataset(size: int = 100, seed: Optional[int] = None) -> dict:
    """Generate the uniform record table. Scores are random; pass seed to pin them."""
    rng = random.Random(seed)
    return {
        "records": [
            {
                "id": i + 1,
                "username": f"user{i + 1}",
                "email": f"user{i + 1}@example.com",
                "age": 20 + (i % 50),
                "country": COUNTRIES[i % 5],
                "subscribed": i % 2 == 0,
                "lastLogin": f"2024-01-{(i % 30) + 1:02d}",
                "score": rng.randrange(1000),
            }
            for i in range(size)
        ]
    }


def _team(name, members, lead):
    return {"name": name, "members": members, "lead": lead}


def builtin_samples(seed: Optional[int] = None) -> dict:
    """Fresh copies of the built-in sample sets, keyed in display order."""
    return {
        "userList": {
            "users": [
                {"id": 1, "name": "Alice Johnson", "email": "alice@example.com", "role": "admin", "active": True},
                {"id": 2, "name": "Bob Smith", "email": "bob@example.com", "role": "user", "active": True},
                {"id": 3, "name": "Charlie Brown", "email": "charlie@example.com", "role": "user", "active": False},
                {"id": 4, "name": "Diana Prince", "email": "diana@example.com", "role": "moderator", "active": True},
                {"id": 5, "name": "Eve Wilson", "email": "eve@example.com", "role": "user", "active": True},
            ]
        },
        "order": {
            "orderId": "ORD-2024-001",
            "customer": {
                "id": 12345,
                "name": "John Doe",
                "email": "john.doe@email.com",
                "address": {
                    "street": "123 Main St",
                    "city": "New York",
                    "state": "NY",
                    "zip": "10001",
                    "country": "USA",
                },
            },
            "items": [
                {"productId": "PROD-001", "name": "Laptop", "quantity": 1, "price": 999.99, "discount": 10},
                {"productId": "PROD-002", "name": "Mouse", "quantity": 2, "price": 29.99, "discount": 0},
                {"productId": "PROD-003", "name": "Keyboard", "quantity": 1, "price": 79.99, "discount": 5},
                {"productId": "PROD-004", "name": "Monitor", "quantity": 2, "price": 299.99, "discount": 15},
            ],
            "payment": {"method": "credit_card", "status": "completed", "total": 1709.94},
            "shipping": {"method": "express", "cost": 25.00, "estimatedDays": 2},
        },
        "apiResponse": {
            "status": "success",
            "code": 200,
            "data": {
                "page": 1,
                "totalPages": 10,
                "itemsPerPage": 20,
                "totalItems": 200,
                "results": [
                    {"id": 101, "title": "First Post", "views": 1500, "likes": 45, "published": True},
                    {"id": 102, "title": "Second Post", "views": 2300, "likes": 78, "published": True},
                    {"id": 103, "title": "Third Post", "views": 890, "likes": 23, "published": False},
                    {"id": 104, "title": "Fourth Post", "views": 3400, "likes": 92, "published": True},
                    {"id": 105, "title": "Fifth Post", "views": 1200, "likes": 34, "published": True},
                ],
            },
            "metadata": {
                "requestId": "req-abc123",
                "timestamp": "2024-01-15T10:30:00Z",
                "processingTime": 45,
            },
        },
        "config": {
            "app": {"name": "MyApplication", "version": "2.1.0", "environment": "production"},
            "database": {
                "host": "db.example.com",
                "port": 5432,
                "name": "myapp_db",
                "user": "dbuser",
                "ssl": True,
                "poolSize": 10,
            },
            "cache": {"enabled": True, "type": "redis", "host": "cache.example.com", "port": 6379, "ttl": 3600},
            "logging": {"level": "info", "format": "json", "destinations": ["console", "file", "elasticsearch"]},
            "features": {"authentication": True, "rateLimit": True, "analytics": True, "notifications": False},
        },
        "company": {
            "name": "Tech Corp",
            "founded": 2010,
            "employees": 500,
            "departments": [
                {
                    "name": "Engineering",
                    "headCount": 200,
                    "teams": [
                        _team("Backend", 50, "Alice Smith"),
                        _team("Frontend", 40, "Bob Johnson"),
                        _team("DevOps", 30, "Charlie Brown"),
                        _team("QA", 35, "Diana Prince"),
                        _team("Mobile", 45, "Eve Wilson"),
                    ],
                },
                {
                    "name": "Sales",
                    "headCount": 150,
                    "teams": [
                        _team("Enterprise", 60, "Frank Miller"),
                        _team("SMB", 50, "Grace Lee"),
                        _team("Partners", 40, "Henry Davis"),
                    ],
                },
                {
                    "name": "Marketing",
                    "headCount": 80,
                    "teams": [
                        _team("Digital", 30, "Iris Chen"),
                        _team("Content", 25, "Jack Wilson"),
                        _team("Events", 25, "Kelly Brown"),
                    ],
                },
            ],
            "locations": ["New York", "San Francisco", "London", "Tokyo", "Berlin"],
            "products": [
                {"name": "Product A", "category": "Software", "price": 99.99, "active": True},
                {"name": "Product B", "category": "Hardware", "price": 499.99, "active": True},
                {"name": "Product C", "category": "Service", "price": 29.99, "active": False},
            ],
        },
        "largeDataset": large_dataset(seed=seed),
    }


# ── Quick demo payload: a typical API response ─────────────────────────────
def demo_payload() -> dict:
    return {
        "status": "success",
        "timestamp": "2024-01-15T10:30:00Z",
        "data": {
            "users": [
                {"id": 1, "name": "Alice Johnson", "email": "alice@tech.com", "role": "admin", "active": True, "lastLogin": "2024-01-15"},
                {"id": 2, "name": "Bob Smith", "email": "bob@tech.com", "role": "developer", "active": True, "lastLogin": "2024-01-14"},
                {"id": 3, "name": "Charlie Davis", "email": "charlie@tech.com", "role": "developer", "active": False, "lastLogin": "2024-01-10"},
                {"id": 4, "name": "Diana Wilson", "email": "diana@tech.com", "role": "manager", "active": True, "lastLogin": "2024-01-15"},
                {"id": 5, "name": "Eve Brown", "email": "eve@tech.com", "role": "developer", "active": True, "lastLogin": "2024-01-13"},
            ],
            "summary": {
                "totalUsers": 5,
                "activeUsers": 4,
                "roles": {"admin": 1, "developer": 3, "manager": 1},
            },
        },
    }


# ── Menu examples: (title, value) ───────────────────────────────────────────
def example_conversions() -> list:
    return [
        ("Simple User List", {
            "users": [
                {"id": 1, "name": "Alice", "role": "admin"},
                {"id": 2, "name": "Bob", "role": "user"},
            ]
        }),
        ("Nested Configuration", {
            "app": {
                "name": "MyApp",
                "version": "1.0.0",
                "settings": {"theme": "dark", "language": "en"},
            }
        }),
        ("Mixed Data Types", {
            "string": "Hello World",
            "number": 42,
            "boolean": True,
            "null": None,
            "array": [1, 2, 3],
            "object": {"key": "value"},
        }),
    ]


def sample_title(key: str) -> str:
    """camelCase key -> spaced title: "userList" -> "User List"."""
    spaced = re.sub(r"([A-Z])", r" \1", key).strip()
    return spaced[:1].upper() + spaced[1:]


def default_pack_dirs() -> List[str]:
    """./sample_packs under the working directory first, then the bundled packs."""
    return [os.path.join(os.getcwd(), "sample_packs"), PACK_DIR]


def find_pack(name: str, search_dirs: Optional[List[str]] = None) -> str:
    """Resolve a pack name (or a path to an existing file) to a file path."""
    if os.path.isfile(name):
        return name
    dirs = default_pack_dirs() if search_dirs is None else search_dirs
    filename = name if name.endswith(".json") else f"{name}.json"
    for candidate in (os.path.join(d, filename) for d in dirs):
        if os.path.isfile(candidate):
            logger.debug("sample pack %r -> %s", name, candidate)
            return candidate
    raise FileNotFoundError(f"Sample pack '{name}' not found in {dirs}")


def load_samples(pack_path_or_name: str, search_dirs: Optional[List[str]] = None) -> dict:
    """Load extra sample sets from a pack file.

    A pack is a JSON object mapping set names to values, read in file order.

    Raises:
        FileNotFoundError: no file by that path, and no pack by that name
        ValueError: the file is not JSON, or its top level is not an object
    """
    path = find_pack(pack_path_or_name, search_dirs)
    with open(path, encoding="utf-8") as f:
        samples = json.load(f)
    if not isinstance(samples, dict):
        raise ValueError(f"Sample pack {path} must hold a JSON object of named sets")
    return samples
