"""Built-in materials, tooling and numeric limits.

These are the stock values the simulator starts with; a shop can replace
the tooling with its own JSON file (see ``ToolingCatalog.from_json``).
"""

from ..core.material import MaterialCatalog, MaterialDetails
from ..core.tooling import Die, Punch, ToolingCatalog
from ..core.validate import BendLimits, SheetLimits

MACHINE_NAME = "CNC Press Brake Simulator"

DEFAULT_MATERIAL = "Steel"
DEFAULT_JOB_NAME = "DefaultJob-001"
DEFAULT_SHEET_ID = "DefaultSheet-001"
DEFAULT_SHEET_LENGTH = 300.0
DEFAULT_SHEET_WIDTH = 100.0
DEFAULT_SHEET_THICKNESS = 2.0

BEND_LIMITS = BendLimits(
    min_radius=0.0,
    max_radius=500.0,
    min_angle=1.0,
    max_angle=179.0,
)

SHEET_LIMITS = SheetLimits(min_dimension=0.1, max_dimension=10000.0)


def build_default_material_catalog() -> MaterialCatalog:
    """Return the stock materials, in display order."""
    return MaterialCatalog([
        MaterialDetails(
            name="Steel",
            density=7850,
            yield_stress=250,
            tensile_modulus=200,
            min_bend_radius_factor=1.5,
        ),
        MaterialDetails(
            name="Aluminum",
            density=2700,
            yield_stress=100,
            tensile_modulus=70,
            min_bend_radius_factor=1.0,
        ),
        MaterialDetails(
            name="Stainless Steel",
            density=8000,
            yield_stress=215,
            tensile_modulus=193,
            min_bend_radius_factor=2.0,
        ),
        MaterialDetails(
            name="Copper",
            density=8960,
            yield_stress=70,
            tensile_modulus=117,
            min_bend_radius_factor=0.8,
        ),
        MaterialDetails(
            name="Mild Steel",
            density=7850,
            yield_stress=220,
            tensile_modulus=200,
            min_bend_radius_factor=1.2,
        ),
    ])


def build_default_tooling_catalog() -> ToolingCatalog:
    """Return a ToolingCatalog with the starter punches and V-dies."""
    punches = [
        Punch(name="P88.10.R06", height=60, angle=88, radius=0.6),
        Punch(name="P30.15.R1", height=65, angle=30, radius=1.0),
        Punch(name="Default Punch", height=50, angle=90, radius=1.0),
    ]
    dies = [
        Die(name="D12.90.R2", v_opening=12, angle=90, shoulder_radius=2.0),
        Die(name="D20.60.R3", v_opening=20, angle=60, shoulder_radius=3.0),
        Die(name="Default Die", v_opening=16, angle=90, shoulder_radius=2.0),
    ]
    return ToolingCatalog(punches, dies)
