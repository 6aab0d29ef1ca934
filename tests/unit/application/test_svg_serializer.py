"""Tests for application.services.svg_serializer."""

from __future__ import annotations

import xml.etree.ElementTree as ET

import pytest

from src.application.services.feed_parser import parse_feed
from src.application.services.svg_serializer import to_svg
from src.application.use_cases.build_rate_chart import BuildRateChartUseCase
from src.domain.entities.scene import Group, VectorScene

NS = {"svg": "http://www.w3.org/2000/svg"}


@pytest.fixture
def usd_svg(scenario_two_raw) -> str:
    return to_svg(BuildRateChartUseCase().execute(parse_feed(scenario_two_raw), "USD"))


def test_root_element_and_title(usd_svg) -> None:
    root = ET.fromstring(usd_svg)

    assert root.tag == "{http://www.w3.org/2000/svg}svg"
    assert root.get("width") == "425"
    assert root.get("height") == "200"
    assert root.find("svg:title", NS).text == "USD Exchange Rate"


def test_curves_and_labels_are_serialized(usd_svg) -> None:
    root = ET.fromstring(usd_svg)

    strokes = [p.get("stroke") for p in root.iter("{http://www.w3.org/2000/svg}path")]
    assert "#7cb5ec" in strokes
    assert "#f7a35c" in strokes
    labels = [t.text for t in root.iter("{http://www.w3.org/2000/svg}text")]
    assert labels.count("Jan02") == 5
    assert "30.50" in labels


def test_groups_keep_class_and_transform(usd_svg) -> None:
    root = ET.fromstring(usd_svg)
    groups = {g.get("class"): g for g in root.iter("{http://www.w3.org/2000/svg}g")}

    assert groups["chart"].get("transform") == "translate(30,10)"
    assert groups["x-axis"].get("transform") == "translate(0,175)"
    assert groups["bands"].find("svg:rect", NS).get("fill") == "rgba(68, 170, 213, 0.1)"


def test_unset_attributes_are_omitted() -> None:
    scene = VectorScene(width=10, height=10, title="t", root=Group())

    svg = to_svg(scene)

    assert "transform" not in svg
    assert "class" not in svg


def test_unknown_nodes_are_rejected() -> None:
    scene = VectorScene(width=10, height=10, title="t", root=Group(children=("oops",)))

    with pytest.raises(TypeError):
        to_svg(scene)
