import pytest

from golf_worlds.core.errors import InvalidPlacementError
from golf_worlds.core.input_router import PointerState
from golf_worlds.worlds.course_designer import COLS, FRICTION, Cell, Terrain


@pytest.fixture
def designer(session):
    return session.start_world("designer")


@pytest.fixture
def playing(designer):
    designer.tee = Cell(10, 10)
    designer.hole = Cell(10, 70)
    designer.start_play_mode()
    return designer


def test_grid_rows_follow_aspect_ratio(designer):
    # 800x480 surface
    assert designer.rows == 48
    assert len(designer.grid) == 48
    assert all(len(row) == COLS for row in designer.grid)
    assert designer.cell_w == pytest.approx(10.0)
    assert designer.cell_h == pytest.approx(10.0)


def test_world_to_cell_truncates_and_clamps(designer):
    assert designer.world_to_cell(25.9, 37.2) == Cell(3, 2)
    assert designer.world_to_cell(-5, -5) == Cell(0, 0)
    assert designer.world_to_cell(5000, 5000) == Cell(47, 79)


def test_painting_with_brush_keys(designer):
    designer.on_key_down("3")
    designer.paint_at(25, 37)
    assert designer.grid[3][2] is Terrain.WATER

    designer.on_key_down("5")
    designer.paint_at(25, 37)
    assert designer.grid[3][2] is Terrain.GRASS


def test_drag_paints_only_while_pressed(designer):
    designer.on_pointer_move(PointerState(105, 105, False))
    assert designer.grid[10][10] is Terrain.GRASS
    designer.on_pointer_move(PointerState(105, 105, True))
    assert designer.grid[10][10] is Terrain.SAND


def test_hole_and_tee_placement(designer):
    designer.on_key_down("h")
    designer.paint_at(300, 200)
    designer.on_key_down("t")
    designer.paint_at(50, 60)
    assert designer.hole == Cell(20, 30)
    assert designer.tee == Cell(6, 5)
    assert designer.grid[20][30] is Terrain.GRASS


def test_eraser_removes_markers(designer):
    designer.hole = Cell(20, 30)
    designer.brush = "eraser"
    designer.paint_at(305, 205)
    assert designer.hole is None


def test_play_without_tee_and_hole_raises(designer):
    with pytest.raises(InvalidPlacementError):
        designer.start_play_mode()
    assert not designer.in_play_mode


def test_play_button_without_tee_and_hole_shows_message(designer):
    button = designer._btn_play.rect
    designer.on_pointer_down(PointerState(button.centerx, button.centery, True))
    assert not designer.in_play_mode
    assert designer.message == "Place both tee and hole first!"


def test_play_mode_puts_ball_on_tee(playing, shell):
    assert playing.in_play_mode
    assert (playing.ball.x, playing.ball.y) == pytest.approx((105.0, 105.0))
    assert shell.status == "Play mode - Strokes 0"


@pytest.mark.parametrize("terrain", list(Terrain))
def test_rolling_friction_depends_on_terrain(playing, terrain):
    playing.grid[10][11] = terrain
    playing.ball.vx = 5.0
    playing.ball.moving = True

    playing.update_play()

    assert playing.ball.x == pytest.approx(110.0)
    assert playing.ball.vx == pytest.approx(5.0 * FRICTION[terrain])


def test_sand_stops_a_putt_sooner_than_grass(playing):
    def roll(terrain):
        for row in playing.grid:
            row[:] = [terrain] * COLS
        playing.ball.x, playing.ball.y = 105.0, 105.0
        playing.ball.vx, playing.ball.vy = 3.0, 0.0
        playing.ball.moving = True
        while playing.ball.moving:
            playing.update_play()
        return playing.ball.x

    assert roll(Terrain.SAND) < roll(Terrain.GRASS)


def test_space_charges_and_release_putts(playing, session, clock):
    playing.on_key_down("space")
    assert playing.charging
    clock.advance(16)
    session.scheduler.pump()
    assert playing.power == 2
    playing.on_key_up("space")
    assert playing.ball.moving
    assert playing.strokes == 1


def test_held_arrow_keys_rotate_aim(playing, session):
    session.input.on_key_down("right")
    playing.update_play()
    playing.update_play()
    assert playing.aim == pytest.approx(0.1)


def test_putt_off_the_surface_returns_to_tee(playing):
    playing.ball.x = playing.width - 2
    playing.ball.vx = 10.0
    playing.ball.moving = True

    playing.update_play()

    assert (playing.ball.x, playing.ball.y) == pytest.approx((105.0, 105.0))
    assert not playing.ball.moving
    assert playing.message == "Out of bounds - back to the tee"
    assert playing.in_play_mode


def test_reaching_the_cup_returns_to_design_mode(playing, shell):
    playing.ball.x, playing.ball.y = 704.5, 105.0
    playing.ball.vx = 0.5
    playing.ball.moving = True
    playing.strokes = 2
    playing.grid[0][0] = Terrain.WATER

    playing.update_play()

    assert not playing.in_play_mode
    assert playing.message == "Hole completed in 2 strokes!"
    assert playing.grid[0][0] is Terrain.WATER
    assert shell.status == "Designer mode"


def test_message_clears_after_delay(designer, session, clock):
    designer.show_message("hello")
    clock.advance(1000)
    session.scheduler.pump()
    assert designer.message == "hello"
    clock.advance(900)
    session.scheduler.pump()
    assert designer.message is None


def test_resize_in_play_mode_keeps_ball_on_its_cell(playing, session, container):
    assert (playing.ball.x, playing.ball.y) == pytest.approx((105, 105))

    container.set_size(1600, 960)
    session.on_resize()

    assert playing.cell_w == pytest.approx(20.0)
    assert (playing.ball.x, playing.ball.y) == pytest.approx((210, 210))


def test_resize_in_design_mode_leaves_ball_alone(designer, session, container):
    before = (designer.ball.x, designer.ball.y)
    container.set_size(1600, 960)
    session.on_resize()
    assert (designer.ball.x, designer.ball.y) == before
