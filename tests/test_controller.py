import unittest

from gridplan import (
    Algorithm,
    GridMap,
    PlannerConfig,
    RRTParams,
    RunController,
    Status,
    tick_delay_from_speed,
)


def make_controller(algorithm=Algorithm.ASTAR, seed=1) -> RunController:
    config = PlannerConfig(rrt=RRTParams(rng_seed=seed))
    return RunController(config=config, algorithm=algorithm)


class TestRunController(unittest.TestCase):
    def test_idle_before_start(self):
        controller = make_controller()
        self.assertIs(controller.status, Status.IDLE)
        self.assertIsNone(controller.advance_one_step())
        snap = controller.snapshot()
        self.assertIs(snap.status, Status.IDLE)
        self.assertEqual(snap.path, ())
        self.assertFalse(controller.pause())
        self.assertFalse(controller.cancel())

    def test_run_to_found_on_default_grid(self):
        controller = make_controller()
        controller.start()
        self.assertIs(controller.status, Status.RUNNING)
        snap = controller.run()
        self.assertIs(snap.status, Status.FOUND)
        self.assertEqual(snap.path[0], controller.grid.start)
        self.assertEqual(snap.path[-1], controller.grid.goal)
        self.assertEqual(snap.explored_count, len(snap.visited))
        self.assertEqual(snap.steps, len(snap.visited) + 1)
        self.assertEqual(snap.stats["path_length"], len(snap.path))
        self.assertEqual(snap.tree, ())
        self.assertIsNone(controller.advance_one_step())

    def test_pause_blocks_stepping_until_resume(self):
        controller = make_controller()
        controller.start()
        controller.advance_one_step()
        self.assertTrue(controller.pause())
        self.assertIs(controller.status, Status.PAUSED)
        before = controller.snapshot()
        for _ in range(5):
            self.assertIsNone(controller.advance_one_step())
        self.assertEqual(controller.snapshot().visited, before.visited)
        self.assertFalse(controller.pause())
        self.assertTrue(controller.resume())
        self.assertFalse(controller.resume())
        self.assertIsNotNone(controller.advance_one_step())
        self.assertEqual(controller.snapshot().steps, 2)

    def test_toggle_pause(self):
        controller = make_controller()
        controller.start()
        self.assertTrue(controller.toggle_pause())
        self.assertIs(controller.status, Status.PAUSED)
        self.assertTrue(controller.toggle_pause())
        self.assertIs(controller.status, Status.RUNNING)

    def test_pause_resume_matches_uninterrupted_run(self):
        for algorithm in Algorithm:
            plain = make_controller(algorithm, seed=9)
            plain.start()
            reference = plain.run()

            interleaved = make_controller(algorithm, seed=9)
            interleaved.start()
            tick = 0
            while interleaved.status in (Status.RUNNING, Status.PAUSED):
                if tick % 3 == 0:
                    interleaved.pause()
                elif tick % 3 == 2:
                    interleaved.resume()
                interleaved.advance_one_step()
                tick += 1
            result = interleaved.snapshot()
            self.assertIs(result.status, reference.status)
            self.assertEqual(result.path, reference.path)
            self.assertEqual(result.steps, reference.steps)

    def test_cancel_keeps_partial_progress(self):
        controller = make_controller()
        controller.start()
        for _ in range(5):
            controller.advance_one_step()
        self.assertTrue(controller.cancel())
        snap = controller.snapshot()
        self.assertIs(snap.status, Status.CANCELED)
        self.assertEqual(len(snap.visited), 5)
        self.assertTrue(snap.frontier)
        self.assertEqual(snap.path, ())
        self.assertIsNone(controller.advance_one_step())
        self.assertFalse(controller.resume())
        self.assertFalse(controller.cancel())

    def test_cancel_from_paused(self):
        controller = make_controller()
        controller.start()
        controller.pause()
        self.assertTrue(controller.cancel())
        self.assertIs(controller.status, Status.CANCELED)

    def test_cancel_after_terminal_is_rejected(self):
        controller = make_controller()
        controller.start()
        controller.run()
        self.assertFalse(controller.cancel())
        self.assertIs(controller.status, Status.FOUND)

    def test_grid_edit_discards_session(self):
        controller = make_controller()
        controller.start()
        controller.advance_one_step()
        self.assertFalse(controller.grid.set_obstacle(controller.grid.start))
        self.assertIs(controller.status, Status.RUNNING)
        self.assertTrue(controller.grid.set_obstacle((0, 0)))
        self.assertIs(controller.status, Status.IDLE)
        self.assertIsNone(controller.session)

    def test_marker_move_discards_session(self):
        controller = make_controller()
        controller.start()
        self.assertTrue(controller.grid.set_goal((23, 12)))
        self.assertIs(controller.status, Status.IDLE)

    def test_select_and_clear_discard_session(self):
        controller = make_controller()
        controller.start()
        controller.select("rrt")
        self.assertIs(controller.status, Status.IDLE)
        self.assertIs(controller.algorithm, Algorithm.RRT)
        controller.start()
        controller.clear()
        self.assertIs(controller.status, Status.IDLE)

    def test_reset_reproduces_visited_length(self):
        for algorithm in (Algorithm.ASTAR, Algorithm.DIJKSTRA):
            controller = make_controller(algorithm)
            controller.reset()
            controller.start()
            first = controller.run()
            controller.grid.set_obstacle((0, 0))
            controller.grid.set_start((1, 1))
            controller.reset()
            self.assertIs(controller.status, Status.IDLE)
            controller.start()
            second = controller.run()
            self.assertEqual(len(first.visited), len(second.visited))
            self.assertEqual(first.path, second.path)

    def test_full_wall_exhausts_all_algorithms(self):
        for algorithm in Algorithm:
            controller = make_controller(algorithm)
            controller.grid.fill((12, y) for y in range(controller.grid.height))
            controller.start()
            snap = controller.run()
            self.assertIs(snap.status, Status.EXHAUSTED)
            self.assertEqual(snap.path, ())
            if algorithm is Algorithm.RRT:
                self.assertEqual(snap.steps, controller.config.rrt.max_iterations)

    def test_rrt_snapshot_exposes_tree(self):
        controller = make_controller(Algorithm.RRT, seed=4)
        controller.start()
        snap = controller.run(max_steps=200)
        self.assertEqual(snap.frontier, frozenset())
        self.assertEqual(len(snap.tree), len(snap.visited) - 1)
        self.assertEqual(snap.explored_count, len(snap.visited))
        for parent, child in snap.tree:
            self.assertIn(parent, snap.visited)
            self.assertIn(child, snap.visited)

    def test_run_respects_max_steps(self):
        controller = make_controller(Algorithm.DIJKSTRA)
        snap = controller.run(max_steps=10)
        self.assertIs(snap.status, Status.RUNNING)
        self.assertEqual(snap.steps, 10)

    def test_custom_grid_is_used(self):
        grid = GridMap.empty(25, 25, (2, 12), (22, 12))
        controller = RunController(grid=grid)
        controller.start(Algorithm.ASTAR)
        snap = controller.run()
        self.assertEqual(len(snap.path), 21)
        self.assertTrue(all(cell[1] == 12 for cell in snap.visited))


class TestConfig(unittest.TestCase):
    def test_speed_slider_mapping(self):
        self.assertEqual(tick_delay_from_speed(70), 35.0)
        self.assertEqual(tick_delay_from_speed(100), 5.0)
        self.assertEqual(tick_delay_from_speed(500), 5.0)
        self.assertEqual(tick_delay_from_speed(0), 100.0)

    def test_invalid_dimensions(self):
        with self.assertRaises(ValueError):
            PlannerConfig(width=0)

    def test_algorithm_parse(self):
        self.assertIs(Algorithm.parse("A*"), Algorithm.ASTAR)
        self.assertIs(Algorithm.parse("AStar"), Algorithm.ASTAR)
        self.assertIs(Algorithm.parse("Dijkstra"), Algorithm.DIJKSTRA)
        self.assertIs(Algorithm.parse(Algorithm.RRT), Algorithm.RRT)
        with self.assertRaises(ValueError):
            Algorithm.parse("bfs")


if __name__ == "__main__":
    unittest.main()
