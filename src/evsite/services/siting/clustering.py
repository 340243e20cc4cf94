"""Multi-station siting with weighted K-Means style relocation."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Literal, Optional, Sequence

import numpy as np
from sklearn.cluster import kmeans_plusplus

from ...models.domain import Cluster, OptimalLocationResult, Route, WeightedPoint
from ..geospatial import haversine_m, to_local_xy, weighted_centroid
from .demand import build_demand_points
from .locator import DEFAULT_SNAP_RADIUS_M, RoadSnapper, build_location_result, safe_snap
from .metrics import ACCEPTABLE_DISTANCE_M

logger = logging.getLogger(__name__)

SeedingMethod = Literal["kmeans++", "random"]


@dataclass(slots=True)
class ClusteringRun:
    clusters: list[Cluster]
    iterations: int
    converged: bool


class MultiStationClusterer:
    """Site several stations by iteratively relocating weighted cluster centres.

    Features:
    - Deterministic seeding (weighted k-means++ on a local metric projection, or
      uniform sampling) driven by ``random_state``
    - Great-circle assignment of demand points to their nearest centre
    - Empty clusters keep their previous centre and are dropped from the final result
    - Stops after ``max_iterations`` or once no centre moves more than ``tolerance_m``
    """

    def __init__(
        self,
        *,
        max_iterations: int = 10,
        tolerance_m: float = 0.1,
        seeding: SeedingMethod = "kmeans++",
        random_state: Optional[int] = 42,
        include_midpoints: bool = False,
        max_parallel_snaps: int = 8,
    ) -> None:
        if max_iterations < 1:
            raise ValueError("max_iterations must be >= 1")
        self.max_iterations = max_iterations
        self.tolerance_m = tolerance_m
        self.seeding = seeding
        self.random_state = random_state
        self.include_midpoints = include_midpoints
        self.max_parallel_snaps = max_parallel_snaps

    def _seed_indices(self, points: Sequence[WeightedPoint], n_seeds: int) -> list[int]:
        match self.seeding:
            case "random":
                rng = np.random.default_rng(self.random_state)
                return [int(i) for i in rng.integers(0, len(points), size=n_seeds)]
            case "kmeans++":
                lat = np.array([point.lat for point in points])
                lng = np.array([point.lng for point in points])
                weights = np.array([point.weight for point in points], dtype=float)
                coordinates = to_local_xy(lat, lng, float(lat.mean()), float(lng.mean()))
                _, indices = kmeans_plusplus(
                    coordinates,
                    n_clusters=n_seeds,
                    sample_weight=weights,
                    random_state=self.random_state,
                )
                return [int(i) for i in indices]
            case _:
                raise ValueError(f"Unknown seeding method '{self.seeding}'.")

    @staticmethod
    def _assign(points: Sequence[WeightedPoint], clusters: Sequence[Cluster]) -> list[Cluster]:
        """Return fresh clusters at the same centres holding their nearest points."""
        members: list[list[WeightedPoint]] = [[] for _ in clusters]
        for point in points:
            distances = [haversine_m(point.lat, point.lng, cluster.lat, cluster.lng) for cluster in clusters]
            # Ties go to the lowest-index cluster.
            members[int(np.argmin(distances))].append(point)
        return [Cluster(cluster.lat, cluster.lng, assigned) for cluster, assigned in zip(clusters, members)]

    @staticmethod
    def _relocate(clusters: Sequence[Cluster]) -> list[Cluster]:
        relocated = []
        for cluster in clusters:
            if not cluster.points:
                relocated.append(Cluster(cluster.lat, cluster.lng, []))
                continue
            lat, lng = weighted_centroid([(point.lat, point.lng, point.weight) for point in cluster.points])
            relocated.append(Cluster(lat, lng, list(cluster.points)))
        return relocated

    def fit(self, routes: Sequence[Route], num_stations: int) -> ClusteringRun:
        """Cluster the routes' demand points into at most ``num_stations`` groups."""
        points = build_demand_points(routes, include_midpoints=self.include_midpoints)
        if not points or num_stations < 1:
            return ClusteringRun(clusters=[], iterations=0, converged=False)

        n_seeds = min(num_stations, len(points))
        clusters = [Cluster(points[i].lat, points[i].lng) for i in self._seed_indices(points, n_seeds)]

        iterations = 0
        converged = False
        while iterations < self.max_iterations:
            iterations += 1
            assigned = self._assign(points, clusters)
            relocated = self._relocate(assigned)
            shift = max(
                haversine_m(old.lat, old.lng, new.lat, new.lng) for old, new in zip(clusters, relocated)
            )
            clusters = relocated
            if shift < self.tolerance_m:
                converged = True
                break

        logger.debug(
            f"Clustering finished after {iterations} iteration(s), converged={converged}, "
            f"{sum(1 for c in clusters if c.points)}/{len(clusters)} non-empty clusters"
        )
        return ClusteringRun(clusters=clusters, iterations=iterations, converged=converged)

    def locate(
        self,
        routes: Sequence[Route],
        num_stations: int,
        snapper: RoadSnapper,
        *,
        max_radius_m: float = DEFAULT_SNAP_RADIUS_M,
        acceptable_distance_m: float = ACCEPTABLE_DISTANCE_M,
        campus_bounds: Optional[Sequence[float]] = None,
    ) -> list[OptimalLocationResult]:
        """Return one snapped, scored site per non-empty cluster, in cluster order."""
        if not routes or num_stations < 1:
            return []

        run = self.fit(routes, num_stations)
        clusters = [cluster for cluster in run.clusters if cluster.points]
        if not clusters:
            return []

        with ThreadPoolExecutor(max_workers=min(self.max_parallel_snaps, len(clusters))) as executor:
            snaps = list(
                executor.map(lambda cluster: safe_snap(snapper, cluster.lat, cluster.lng, max_radius_m), clusters)
            )

        logger.info(
            f"Placed {len(clusters)} station(s) for {len(routes)} route(s); "
            f"{sum(1 for snap in snaps if snap.snapped)} snapped to roads"
        )
        return [
            build_location_result(
                (cluster.lat, cluster.lng),
                snap,
                routes,
                method="weighted_kmeans",
                acceptable_distance_m=acceptable_distance_m,
                campus_bounds=campus_bounds,
                result_id=f"optimal-station-{index}",
                assigned_routes=list(dict.fromkeys(point.route_id for point in cluster.points)),
            )
            for index, (cluster, snap) in enumerate(zip(clusters, snaps), start=1)
        ]
