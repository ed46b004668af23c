"""
Recipe capture: pull a recipe out of a web page and post it to the API.

schema.org Recipe JSON-LD is preferred; the page's first <h1> and meta
description fill in name and description when the structured data is absent
or incomplete.
"""

import json
import logging
import re
from typing import Any, Dict, List, Optional

import requests
from bs4 import BeautifulSoup

from app.config import settings

logger = logging.getLogger("mealminder.scraper")

_DURATION_RE = re.compile(
    r"^P(?:(?P<days>\d+)D)?(?:T(?:(?P<hours>\d+)H)?(?:(?P<minutes>\d+)M)?(?:(?P<seconds>\d+)S)?)?$",
    re.IGNORECASE,
)
_LEADING_INT_RE = re.compile(r"^\s*(\d+)")


def empty_recipe() -> Dict[str, Any]:
    return {
        "name": "",
        "description": "",
        "ingredients": [],
        "instructions": [],
        "nutritionInfo": {
            "calories": 0,
            "protein": 0,
            "carbs": 0,
            "fat": 0,
            "vitamins": {},
            "minerals": {},
        },
        "prepTime": 0,
        "cookTime": 0,
        "totalTime": 0,
    }


def leading_int(value: Any) -> int:
    """Integer at the start of a value ("250 kcal" -> 250), 0 when there is none"""
    if isinstance(value, bool):
        return 0
    if isinstance(value, (int, float)):
        return int(value)
    match = _LEADING_INT_RE.match(str(value or ""))
    return int(match.group(1)) if match else 0


def duration_minutes(value: Any) -> int:
    """Minutes in an ISO-8601 duration ("PT1H30M") or a plain number"""
    if not value:
        return 0
    match = _DURATION_RE.match(str(value).strip())
    if match and any(match.groupdict().values()):
        parts = {k: int(v or 0) for k, v in match.groupdict().items()}
        return parts["days"] * 1440 + parts["hours"] * 60 + parts["minutes"] + parts["seconds"] // 60
    return leading_int(value)


def _is_recipe(node: Any) -> bool:
    if not isinstance(node, dict):
        return False
    kind = node.get("@type")
    return kind == "Recipe" or (isinstance(kind, list) and "Recipe" in kind)


def find_recipe_node(soup: BeautifulSoup) -> Optional[Dict[str, Any]]:
    """First schema.org Recipe object in the page's JSON-LD blocks"""
    for script in soup.find_all("script", type="application/ld+json"):
        try:
            data = json.loads(script.string or "")
        except (json.JSONDecodeError, TypeError):
            logger.debug("Skipping unparsable JSON-LD block")
            continue

        candidates = data if isinstance(data, list) else [data]
        for candidate in candidates:
            if _is_recipe(candidate):
                return candidate
            if isinstance(candidate, dict) and isinstance(candidate.get("@graph"), list):
                for item in candidate["@graph"]:
                    if _is_recipe(item):
                        return item
    return None


def _instructions(raw: Any) -> List[Dict[str, Any]]:
    if isinstance(raw, str):
        raw = [raw]
    if not isinstance(raw, list):
        return []

    texts = []
    for step in raw:
        if isinstance(step, str):
            texts.append(step.strip())
        elif isinstance(step, dict):
            # HowToSection nests its steps
            if isinstance(step.get("itemListElement"), list):
                texts.extend(s["content"] for s in _instructions(step["itemListElement"]))
            else:
                texts.append(str(step.get("text") or step.get("name") or "").strip())

    return [
        {"stepNumber": index, "content": text, "richText": ""}
        for index, text in enumerate((t for t in texts if t), start=1)
    ]


def extract_recipe(html: str) -> Dict[str, Any]:
    """Build a recipe-creation payload from a page's HTML"""
    soup = BeautifulSoup(html, "html.parser")
    recipe = empty_recipe()

    node = find_recipe_node(soup)
    if node:
        recipe["name"] = str(node.get("name") or "").strip()
        recipe["description"] = str(node.get("description") or "").strip()
        recipe["prepTime"] = duration_minutes(node.get("prepTime"))
        recipe["cookTime"] = duration_minutes(node.get("cookTime"))
        recipe["totalTime"] = duration_minutes(node.get("totalTime"))

        ingredients = node.get("recipeIngredient")
        if isinstance(ingredients, list):
            recipe["ingredients"] = [
                {"name": str(i).strip(), "amount": 0, "unit": "piece"}
                for i in ingredients
                if str(i).strip()
            ]

        recipe["instructions"] = _instructions(node.get("recipeInstructions"))

        nutrition = node.get("nutrition")
        if isinstance(nutrition, dict):
            recipe["nutritionInfo"].update(
                calories=leading_int(nutrition.get("calories")),
                protein=leading_int(nutrition.get("proteinContent")),
                carbs=leading_int(nutrition.get("carbohydrateContent")),
                fat=leading_int(nutrition.get("fatContent")),
            )

        image = node.get("image")
        if isinstance(image, list):
            image = image[0] if image else None
        if isinstance(image, dict):
            image = image.get("url")
        if isinstance(image, str) and image.startswith(("http://", "https://")):
            recipe["imageUrl"] = image

    if not recipe["name"]:
        heading = soup.find("h1")
        recipe["name"] = heading.get_text(strip=True) if heading else ""

    if not recipe["description"]:
        meta = soup.find("meta", attrs={"name": "description"})
        recipe["description"] = (meta.get("content") or "").strip() if meta else ""

    return recipe


def capture_recipe(
    url: str,
    api_url: Optional[str] = None,
    session: Optional[requests.Session] = None,
) -> Dict[str, Any]:
    """
    Fetch a page, extract its recipe and post it to the recipe endpoint once.

    No retry or backoff is attempted.

    Raises:
        requests.RequestException: when the page fetch or the POST fails
    """
    api_url = (api_url or settings.scraper_api_url).rstrip("/")
    if session is None:
        with requests.Session() as own_session:
            return _fetch_and_post(own_session, url, api_url)
    return _fetch_and_post(session, url, api_url)


def _fetch_and_post(http: requests.Session, url: str, api_url: str) -> Dict[str, Any]:
    page = http.get(url, timeout=settings.scraper_timeout_sec)
    page.raise_for_status()
    recipe = extract_recipe(page.text)
    logger.info(
        f"recipe_extracted url={url} name={recipe['name']!r} "
        f"ingredients={len(recipe['ingredients'])}"
    )

    response = http.post(
        f"{api_url}/recipes", json=recipe, timeout=settings.scraper_timeout_sec
    )
    response.raise_for_status()
    created = response.json()
    logger.info(f"recipe_captured url={url} recipe_id={created.get('id')}")
    return created
