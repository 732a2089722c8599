import pytest

from orrery.camera import Camera3D, ViewpointController
from orrery.data_models import BodyFacts, OrbitingBody
from orrery.simulation import Scene, SimulationController
from orrery.speed import SpeedControl

FACTS = {
    "Earth": BodyFacts(mass="5.97e24 kg", diameter="12,742 km", day_length="24 hours", moons=1),
    "Mars": BodyFacts(mass="6.4171e23 kg", diameter="6,779 km", day_length="24.6 hours", moons=2),
}


@pytest.fixture
def facts():
    return dict(FACTS)


@pytest.fixture
def make_sim(facts):
    """Build a controller; base speed 100 at multiplier 0.01 gives an effective speed of 1."""
    def _make(bodies=None, speed=0.01, scale_satellites=False):
        if bodies is None:
            bodies = [OrbitingBody("Earth", orbit_radius=5.0, angular_speed=100.0, size=0.25, moon_count=1)]
        scene = Scene(bodies=bodies, scale_satellites_with_speed=scale_satellites)
        viewpoint = ViewpointController(Camera3D())
        return SimulationController(scene, facts, SpeedControl(speed), viewpoint)
    return _make
