"""
API point route tests for envelope shape, similarity search and engine error mapping.
"""

import pytest
from fastapi import HTTPException

from api.requests import ClusteringSettings, PointModel, PointsAnalyzeRequest, SimilarPointsRequest
from api.routes import points as points_route
from engine.enums import ClusteringMethod


def _points():
    return [
        PointModel(id=f"p{i}", dimensions={"x": float(x), "y": float(y)})
        for i, (x, y) in enumerate([(0, 0), (0.2, 0.1), (0.1, 0.3), (9, 9), (9.2, 9.1), (8.9, 9.3)])
    ]


@pytest.mark.asyncio
async def test_points_analyze_returns_envelope():
    req = PointsAnalyzeRequest(points=_points(), clustering=ClusteringSettings(k=2))
    res = await points_route.points_analyze(req)

    assert set(res) == {"data", "confidence", "timestamp", "processing_time_ms"}
    assert 0.0 <= res["confidence"] <= 1.0
    assert res["processing_time_ms"] >= 0.0
    assert isinstance(res["timestamp"], str)

    data = res["data"]
    assert data["summary"]["total_points"] == 6
    assert data["summary"]["dimensions"] == 2
    assert sorted(c["size"] for c in data["clusters"]) == [3, 3]
    assert data["correlations"]["dimensions"] == ["x", "y"]


@pytest.mark.asyncio
async def test_points_analyze_dbscan_method_is_passed_through():
    req = PointsAnalyzeRequest(
        points=_points(),
        clustering=ClusteringSettings(method=ClusteringMethod.dbscan, min_cluster_size=2),
    )
    res = await points_route.points_analyze(req)
    assert sum(c["size"] for c in res["data"]["clusters"]) == 6


@pytest.mark.asyncio
async def test_points_analyze_empty_maps_to_422():
    with pytest.raises(HTTPException) as exc:
        await points_route.points_analyze(PointsAnalyzeRequest(points=[]))
    assert exc.value.status_code == 422
    assert "No data points" in exc.value.detail


@pytest.mark.asyncio
async def test_points_similar_ranks_nearest_first():
    pts = _points()
    req = SimilarPointsRequest(target=pts[0], candidates=pts, top_k=2)
    res = await points_route.points_similar(req)

    assert res["target"] == "p0"
    ids = [r["point"]["id"] for r in res["results"]]
    assert len(ids) == 2
    assert "p0" not in ids
    assert set(ids) <= {"p1", "p2"}
    assert res["results"][0]["similarity"] >= res["results"][1]["similarity"]
