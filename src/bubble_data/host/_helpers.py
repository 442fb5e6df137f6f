# Copyright (c) Microsoft Corporation.
# Licensed under the MIT license.

"""Demo data for the host service."""

from __future__ import annotations

import random
from typing import Any, Dict, List, Optional


def generate_random_articles(count: int, rng: Optional[random.Random] = None) -> List[Dict[str, Any]]:
    """Return ``count`` article payloads with a random title and a matching body."""
    rng = rng or random.Random()
    articles = []
    for _ in range(count):
        title = f"New Article {rng.randrange(1000)}"
        articles.append({"title": title, "body": f"This is the content of {title}"})
    return articles
