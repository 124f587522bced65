from pathlib import Path

import pytest

from vssparser.core.errors import CyclicIncludeError, VssIOError, VssSemanticError
from vssparser.core.models import ArraySize, Instance
from vssparser.core.types import ValueType
from vssparser.core.units import Unit
from vssparser.parsing.pipeline import VssPipeline

FIXTURES = Path(__file__).parent / "fixtures" / "spec"
ROOT = FIXTURES / "VehicleSignalSpecification.vspec"


@pytest.fixture(scope="module")
def result():
    return VssPipeline().run(str(ROOT))


def test_fixture_tree_sections(result):
    spec = result.spec
    assert [b.path for b in spec.branches] == [
        "Vehicle",
        "Vehicle.Body.Door",
        "Vehicle.Body.Windshield",
        "Vehicle.VehicleIdentification",
    ]
    assert [s.path for s in spec.sensors] == [
        "Vehicle.Body.Door.IsOpen",
        "Vehicle.Powertrain.Speed",
        "Vehicle.Powertrain.TractionBattery.CellTemperature",
    ]
    assert [a.path for a in spec.attributes] == [
        "Vehicle.Powertrain.Transmission.DriveType",
        "Vehicle.VehicleIdentification.VIN",
    ]


def test_fixture_tree_values(result):
    spec = result.spec

    door = spec.find("Vehicle.Body.Door")
    assert door.instances == [Instance(("1", "2"), "Row"), Instance(("DriverSide", "PassengerSide"))]
    assert door.description == "All doors, including windows and switches."
    assert spec.find("Vehicle.Body.Door.IsOpen").is_actuator

    speed = spec.find("Vehicle.Powertrain.Speed")
    assert (speed.min, speed.max, speed.unit) == (0, 250, Unit.KM_H)

    cells = spec.find("Vehicle.Powertrain.TractionBattery.CellTemperature")
    assert cells.datatype is ValueType.INT16
    assert cells.arraysize == ArraySize.sized(4)
    assert cells.allowed == ["-40", "85"]
    assert cells.description == "Temperature of each cell in the traction battery."

    drive = spec.find("Vehicle.Powertrain.Transmission.DriveType")
    assert drive.default == ["UNKNOWN"]
    assert len(drive.allowed) == 4


def test_fixture_tree_locations(result):
    spec = result.spec
    assert result.where(spec.find("Vehicle")) == f"{FIXTURES}/VehicleSignalSpecification.vspec:5"
    assert result.where(spec.find("Vehicle.Body.Door.IsOpen")) == f"{FIXTURES}/Body/Body.vspec:10"
    assert result.where(spec.find("Vehicle.Powertrain.Transmission.DriveType")).endswith("Powertrain.vspec:20")
    assert result.where(spec.find("Vehicle.VehicleIdentification.VIN")).endswith("VehicleSignalSpecification.vspec:16")


def test_root_prefix(tmp_path):
    root = tmp_path / "root.vspec"
    root.write_text("Speed:\n  type: sensor\n  datatype: float\n")
    spec = VssPipeline().run(str(root), prefix="Vehicle").spec
    assert spec.sensors[0].path == "Vehicle.Speed"


def test_missing_root(tmp_path):
    with pytest.raises(VssIOError, match="fail to open"):
        VssPipeline().run(str(tmp_path / "absent.vspec"))


def test_cycle_on_disk(tmp_path):
    (tmp_path / "a.vspec").write_text("#include b.vspec\n")
    (tmp_path / "b.vspec").write_text("#include a.vspec\n")
    with pytest.raises(CyclicIncludeError):
        VssPipeline().run(str(tmp_path / "a.vspec"))


def test_failures_are_logged(tmp_path, caplog):
    root = tmp_path / "bad.vspec"
    root.write_text("T:\n  type: sensor\n  datatype: float\n  unit: parsec\n")
    with caplog.at_level("ERROR", logger="vssparser.pipeline"):
        with pytest.raises(VssSemanticError):
            VssPipeline().run(str(root))
    assert "Parsing aborted" in caplog.text
    assert "bad.vspec:4" in caplog.text
