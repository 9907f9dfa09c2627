"""Shared test fixtures for godot_dts tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from godot_dts.codegen.core.config import GeneratorConfig
from godot_dts.codegen.languages.typescript.generator import TypeScriptGenerator


CAR_XML = """<?xml version="1.0" encoding="UTF-8" ?>
<class name="Car" version="4.4">
	<brief_description>
		A car.
	</brief_description>
	<description>
	</description>
	<methods>
		<method name="get_speed">
			<return type="float" />
			<description>
				Returns the speed.
			</description>
		</method>
	</methods>
	<members>
		<member name="speed" type="float" setter="set_speed" getter="get_speed" default="0.0">
			Current speed.
		</member>
	</members>
</class>
"""

ASTAR_XML = """<?xml version="1.0" encoding="UTF-8" ?>
<class name="AStar2D" inherits="RefCounted" version="4.4">
	<brief_description>
		An implementation of A* for 2D space.
	</brief_description>
	<methods>
		<method name="add_point">
			<return type="void" />
			<param index="0" name="position" type="Vector2" />
			<param index="1" name="weight_scale" type="float" default="1.0" />
			<description>
				Adds a new point at the given position.
			</description>
		</method>
		<method name="_compute_cost" qualifiers="virtual const">
			<return type="float" />
			<param index="0" name="from_id" type="int" />
			<param index="1" name="to_id" type="int" />
			<description>
				Called when computing the cost between two connected points.
			</description>
		</method>
		<method name="get_point_ids">
			<return type="PackedInt64Array" />
			<description>
			</description>
		</method>
	</methods>
</class>
"""

TAB_BAR_XML = """<?xml version="1.0" encoding="UTF-8" ?>
<class name="TabBar" inherits="Control" version="4.4">
	<brief_description>
		A control that provides a horizontal bar with tabs.
	</brief_description>
	<methods>
		<method name="tab_selected">
			<return type="void" />
			<param index="0" name="tab" type="int" />
			<description>
			</description>
		</method>
	</methods>
	<signals>
		<signal name="tab_selected">
			<param index="0" name="tab" type="int" />
			<description>
				Emitted when a tab is selected.
			</description>
		</signal>
		<signal name="changed">
			<description>
			</description>
		</signal>
	</signals>
	<constants>
		<constant name="ALIGNMENT_LEFT" value="0" enum="AlignmentMode">
			Places tabs to the left.
		</constant>
		<constant name="ALIGNMENT_CENTER" value="1" enum="AlignmentMode" deprecated="Use ALIGNMENT_LEFT.">
		</constant>
	</constants>
</class>
"""

GLOBAL_SCOPE_XML = """<?xml version="1.0" encoding="UTF-8" ?>
<class name="@GlobalScope" version="4.4">
	<brief_description>Global scope constants and functions.</brief_description>
</class>
"""

INT_XML = """<?xml version="1.0" encoding="UTF-8" ?>
<class name="int" version="4.4">
	<brief_description>Built-in integer type.</brief_description>
</class>
"""

BROKEN_XML = """<?xml version="1.0" encoding="UTF-8" ?>
<class name="Broken" version="4.4">
	<members>
		<member name="oops" type="int">
</class>
"""


@pytest.fixture
def generator() -> TypeScriptGenerator:
    return TypeScriptGenerator(GeneratorConfig())


@pytest.fixture
def classes_dir(tmp_path: Path) -> Path:
    directory = tmp_path / "classes"
    directory.mkdir()
    files = {
        "Car.xml": CAR_XML,
        "AStar2D.xml": ASTAR_XML,
        "TabBar.xml": TAB_BAR_XML,
        "@GlobalScope.xml": GLOBAL_SCOPE_XML,
        "int.xml": INT_XML,
        "Broken.xml": BROKEN_XML,
        "README.md": "not a description",
    }
    for name, content in files.items():
        (directory / name).write_text(content, encoding="utf-8")
    return directory


@pytest.fixture
def run_config(classes_dir: Path, tmp_path: Path) -> GeneratorConfig:
    return GeneratorConfig(
        godot_tag="test-stable",
        classes_dir=str(classes_dir),
        output_root=str(tmp_path / "gen"),
    )


@pytest.fixture
def car_xml() -> str:
    return CAR_XML


@pytest.fixture
def astar_xml() -> str:
    return ASTAR_XML


@pytest.fixture
def tab_bar_xml() -> str:
    return TAB_BAR_XML


@pytest.fixture
def global_scope_xml() -> str:
    return GLOBAL_SCOPE_XML


@pytest.fixture
def broken_xml() -> str:
    return BROKEN_XML
