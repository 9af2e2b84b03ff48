"""Tests for stadiumkit.entities, stadiumkit.background and stadiumkit.physics."""

from __future__ import annotations

import logging

import pytest

from stadiumkit.background import Background, BackgroundType, resolve_background
from stadiumkit.entities import (
    resolve_disc,
    resolve_goal,
    resolve_plane,
    resolve_vertex,
)
from stadiumkit.errors import FormatError
from stadiumkit.physics import (
    DEFAULT_BALL_DISC,
    BallSource,
    resolve_ball,
    resolve_player_physics,
)
from stadiumkit.primitives import (
    TRANSPARENT,
    WHITE,
    Color,
    CollisionFlag,
    Team,
    Vec2,
)
from stadiumkit.traits import TraitTable, handle_traits

NO_TRAITS = TraitTable()


@pytest.fixture
def traits() -> TraitTable:
    return handle_traits({
        "ballArea": {"vis": False, "bCoef": 1, "cMask": ["ball"]},
        "goalPost": {"radius": 8, "invMass": 0, "bCoef": 0.5},
        "heavy": {"invMass": 0.2, "damping": 0.9, "color": "FF0000", "cGroup": ["c0"]},
    })


# ---------------------------------------------------------------------------
# Vertex
# ---------------------------------------------------------------------------

class TestResolveVertex:
    """Tests for vertex resolution."""

    def test_defaults(self) -> None:
        vertex = resolve_vertex({"x": 1, "y": -2}, NO_TRAITS)
        assert vertex.position == Vec2(1.0, -2.0)
        assert vertex.b_coef == 1.0
        assert vertex.c_group == CollisionFlag.WALL
        assert vertex.c_mask == CollisionFlag.ALL

    def test_trait_overrides_default(self, traits: TraitTable) -> None:
        vertex = resolve_vertex({"x": 0, "y": 0, "trait": "ballArea"}, traits)
        assert vertex.b_coef == 1.0
        assert vertex.c_mask == CollisionFlag.BALL

    def test_explicit_overrides_trait(self, traits: TraitTable) -> None:
        vertex = resolve_vertex(
            {"x": 0, "y": 0, "trait": "ballArea", "cMask": ["red", "blue"]}, traits,
        )
        assert vertex.c_mask == CollisionFlag.RED | CollisionFlag.BLUE

    def test_missing_coordinate(self) -> None:
        with pytest.raises(FormatError) as exc_info:
            resolve_vertex({"x": 1}, NO_TRAITS, entity="vertexes[3]")
        assert exc_info.value.entity == "vertexes[3]"
        assert exc_info.value.field == "y"

    def test_unknown_trait(self) -> None:
        with pytest.raises(FormatError, match="unknown trait 'ghost'"):
            resolve_vertex({"x": 0, "y": 0, "trait": "ghost"}, NO_TRAITS)


# ---------------------------------------------------------------------------
# Disc
# ---------------------------------------------------------------------------

class TestResolveDisc:
    """Tests for disc resolution."""

    def test_defaults(self) -> None:
        disc = resolve_disc({"pos": [-700, 80]}, NO_TRAITS)
        assert disc.position == Vec2(-700.0, 80.0)
        assert disc.speed == Vec2(0.0, 0.0)
        assert disc.gravity == Vec2(0.0, 0.0)
        assert disc.radius == 8.0
        assert disc.inv_mass == 0.0
        assert disc.damping == 0.99
        assert disc.b_coef == 0.5
        assert disc.color == WHITE
        assert disc.c_group == CollisionFlag.ALL
        assert disc.c_mask == CollisionFlag.ALL

    def test_goal_post_trait(self, traits: TraitTable) -> None:
        disc = resolve_disc({"pos": [0, 0], "trait": "goalPost"}, traits)
        assert disc.radius == 8.0
        assert disc.inv_mass == 0.0
        assert disc.b_coef == 0.5

    def test_trait_fields(self, traits: TraitTable) -> None:
        disc = resolve_disc({"pos": [0, 0], "trait": "heavy", "damping": 0.5}, traits)
        assert disc.inv_mass == 0.2
        assert disc.damping == 0.5
        assert disc.color == Color(255, 0, 0)
        assert disc.c_group == CollisionFlag.C0

    def test_transparent_color_allowed(self) -> None:
        disc = resolve_disc({"pos": [0, 0], "color": "transparent"}, NO_TRAITS)
        assert disc.color == TRANSPARENT

    def test_missing_position(self) -> None:
        with pytest.raises(FormatError, match=r"discs\[0\]\.pos: missing mandatory field"):
            resolve_disc({"radius": 3}, NO_TRAITS, entity="discs[0]")

    def test_not_an_object(self) -> None:
        with pytest.raises(FormatError, match="expected an object"):
            resolve_disc("disc", NO_TRAITS, entity="discs[1]")


# ---------------------------------------------------------------------------
# Plane / Goal
# ---------------------------------------------------------------------------

class TestResolvePlane:

    def test_defaults(self) -> None:
        plane = resolve_plane({"normal": [0, 1], "dist": -240}, NO_TRAITS)
        assert plane.normal == Vec2(0.0, 1.0)
        assert plane.dist == -240.0
        assert plane.b_coef == 1.0
        assert plane.c_group == CollisionFlag.WALL
        assert plane.c_mask == CollisionFlag.ALL

    def test_missing_dist(self) -> None:
        with pytest.raises(FormatError) as exc_info:
            resolve_plane({"normal": [0, 1]}, NO_TRAITS, entity="planes[0]")
        assert exc_info.value.field == "dist"


class TestResolveGoal:

    def test_goal(self) -> None:
        goal = resolve_goal({"p0": [-700, 100], "p1": [-700, -100], "team": "red"})
        assert goal.p0 == Vec2(-700.0, 100.0)
        assert goal.p1 == Vec2(-700.0, -100.0)
        assert goal.team is Team.RED

    def test_invalid_team(self) -> None:
        with pytest.raises(FormatError) as exc_info:
            resolve_goal({"p0": [0, 0], "p1": [0, 1], "team": "green"}, entity="goals[1]")
        assert exc_info.value.entity == "goals[1]"
        assert exc_info.value.field == "team"

    def test_goals_take_no_trait(self) -> None:
        goal = resolve_goal({"p0": [0, 0], "p1": [0, 1], "team": "blue", "trait": "x"})
        assert goal.team is Team.BLUE


# ---------------------------------------------------------------------------
# Background
# ---------------------------------------------------------------------------

class TestResolveBackground:
    """Tests for the background block."""

    def test_absent_gives_default(self) -> None:
        bg = resolve_background(None)
        assert bg == Background(
            type=BackgroundType.NONE,
            width=0.0,
            height=0.0,
            kick_off_radius=0.0,
            corner_radius=0.0,
            goal_line=0.0,
            color=Color(0x71, 0x8C, 0x5A),
        )

    def test_grass(self) -> None:
        bg = resolve_background({
            "type": "grass", "width": 550, "height": 240, "kickOffRadius": 80,
            "cornerRadius": 0,
        })
        assert bg.type is BackgroundType.GRASS
        assert (bg.width, bg.height, bg.kick_off_radius) == (550.0, 240.0, 80.0)

    def test_unknown_type_falls_back(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="stadiumkit.background"):
            bg = resolve_background({"type": "ice"})
        assert bg.type is BackgroundType.NONE
        assert any("Unknown background type" in r.getMessage() for r in caplog.records)

    def test_transparent_rejected(self) -> None:
        with pytest.raises(FormatError) as exc_info:
            resolve_background({"color": "transparent"})
        assert exc_info.value.entity == "bg"
        assert exc_info.value.field == "color"


# ---------------------------------------------------------------------------
# Player physics
# ---------------------------------------------------------------------------

class TestResolvePlayerPhysics:

    def test_defaults(self) -> None:
        physics = resolve_player_physics(None)
        assert physics.gravity == Vec2(0.0, 0.0)
        assert physics.radius == 15.0
        assert physics.inv_mass == 1.0
        assert physics.b_coef == 0.5
        assert physics.damping == 0.96
        assert physics.c_group == CollisionFlag(0)
        assert physics.acceleration == 0.1
        assert physics.kicking_acceleration == 0.07
        assert physics.kicking_damping == 0.96
        assert physics.kick_strength == 5.0
        assert physics.kickback == 0.0

    def test_overrides(self) -> None:
        physics = resolve_player_physics({"kickStrength": 7, "cGroup": ["c1"]})
        assert physics.kick_strength == 7.0
        assert physics.c_group == CollisionFlag.C1
        assert physics.radius == 15.0

    def test_malformed_field_is_located(self) -> None:
        with pytest.raises(FormatError, match=r"playerPhysics\.radius"):
            resolve_player_physics({"radius": "big"})


# ---------------------------------------------------------------------------
# Ball
# ---------------------------------------------------------------------------

class TestResolveBall:
    """Tests for the three forms of ``ballPhysics``."""

    def test_absent_gives_default_ball(self) -> None:
        discs = [resolve_disc({"pos": [1, 1]}, NO_TRAITS)]
        ball = resolve_ball(None, discs, NO_TRAITS)
        assert ball.source is BallSource.DEFAULT
        assert ball.disc == DEFAULT_BALL_DISC
        assert ball.disc.radius == 10.0
        assert ball.disc.inv_mass == 1.0
        assert ball.disc.c_group == CollisionFlag.BALL
        assert len(discs) == 1

    def test_disc0_takes_first_disc(self) -> None:
        first = resolve_disc({"pos": [0, 0], "radius": 6.4}, NO_TRAITS)
        second = resolve_disc({"pos": [5, 5]}, NO_TRAITS)
        discs = [first, second]
        ball = resolve_ball("disc0", discs, NO_TRAITS)
        assert ball.source is BallSource.DISC0
        assert ball.disc is first
        assert discs == [second]

    def test_disc0_without_discs(self) -> None:
        with pytest.raises(FormatError, match="no discs") as exc_info:
            resolve_ball("disc0", [], NO_TRAITS)
        assert exc_info.value.entity == "ballPhysics"

    def test_explicit_object_uses_disc_defaults(self, traits: TraitTable) -> None:
        ball = resolve_ball({"radius": 6.25, "trait": "heavy"}, [], traits)
        assert ball.source is BallSource.EXPLICIT
        assert ball.disc.position == Vec2(0.0, 0.0)
        assert ball.disc.radius == 6.25
        assert ball.disc.inv_mass == 0.2
        assert ball.disc.b_coef == 0.5

    def test_explicit_position_is_ignored(self) -> None:
        ball = resolve_ball({"pos": [40, 40]}, [], NO_TRAITS)
        assert ball.disc.position == Vec2(0.0, 0.0)

    @pytest.mark.parametrize("raw", ["disc1", "", 0, [1, 2], True])
    def test_other_values_fail(self, raw: object) -> None:
        with pytest.raises(FormatError) as exc_info:
            resolve_ball(raw, [], NO_TRAITS)
        assert exc_info.value.entity == "ballPhysics"
