# looproute/services/annotation.py

import asyncio
import random
from typing import List, Optional, Protocol, Sequence

from looproute.core.logger import logger
from looproute.models.routing import Route, RouteAnnotation, RouteDifficulty


class RouteAnnotator(Protocol):
    """
    Gives a built route a short label and a one or two sentence
    description. May raise; callers keep the route unannotated then.
    """

    async def annotate(self, route: Route) -> RouteAnnotation:
        ...


class RuleBasedRouteAnnotator:
    """
    Offline annotator picking canned text from the route's elevation,
    distance and difficulty.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self._rng = rng or random.Random()

    @staticmethod
    def label_choices(route: Route) -> List[str]:
        if route.elevation_m < 30:
            return ["Flat Runner", "Easy Cruise", "Smooth Path", "Level Ground"]
        if route.elevation_m > 100:
            return ["Hill Challenge", "Summit Quest", "Peak Explorer", "Mountain Trail"]
        if route.distance_km < 2.0:
            return ["Quick Sprint", "Short Burst", "Power Run", "Express Route"]
        if route.distance_km > 8.0:
            return ["Long Haul", "Distance Challenge", "Endurance Test", "Marathon Prep"]
        return ["Perfect Balance", "Classic Route", "Runner's Choice", "Ideal Path"]

    @staticmethod
    def description_for(route: Route) -> str:
        if route.elevation_m < 30 and route.distance_km < 3.0:
            return (
                "A gentle, flat route perfect for beginners or recovery runs "
                "with minimal elevation changes."
            )
        if route.elevation_m > 100:
            return (
                "Challenge yourself with this hilly route that offers great views "
                "and a solid workout for your legs."
            )
        if route.distance_km > 7.0:
            return (
                "A longer route for serious runners looking to build endurance "
                "and explore more of the area."
            )
        if route.difficulty == RouteDifficulty.EASY:
            return (
                "An easy-going route with pleasant scenery and comfortable pacing "
                "for all fitness levels."
            )
        return (
            "A well-balanced route offering a mix of terrain and challenges "
            "to keep your run interesting."
        )

    async def annotate(self, route: Route) -> RouteAnnotation:
        return RouteAnnotation(
            label=self._rng.choice(self.label_choices(route)),
            description=self.description_for(route),
        )


async def _annotate_one(route: Route, annotator: RouteAnnotator) -> Route:
    if route.label is not None:
        return route
    try:
        annotation = await annotator.annotate(route)
    except Exception as exc:
        # Annotation is cosmetic; an unannotated route is still a valid result.
        logger.warning("Annotation failed for route {}: {}", route.id, exc)
        return route
    return route.with_annotation(annotation.label, annotation.description)


async def annotate_routes(routes: Sequence[Route], annotator: RouteAnnotator) -> List[Route]:
    """
    Annotate every route that has no label yet, concurrently, keeping order.
    """
    return list(await asyncio.gather(*(_annotate_one(r, annotator) for r in routes)))
