# main.py
"""
Main entry point for the Voronoi balls animation.

This script orchestrates the whole lifecycle:
1. Loads configuration from `config.json`.
2. Initializes the logging system.
3. Opens the window and builds the selected variant ("balls" or "jitter").
4. Runs the frame loop until the window is closed.
5. Handles clean shutdown.
"""
import logging
from utils import setup_logging, load_config
import numpy as np
import pygame
import cProfile
import pstats
import io


def run_balls(config: dict) -> None:
    """
    Runs the interactive bouncing balls variant until the user quits.
    """
    from simulation import Simulation
    from visualization import Visualizer
    from scheduler import ClockScheduler
    from events import EventRouter
    from app import VoronoiBallsApp

    sim_params = config.get('simulation_parameters', {})
    vis_params = config.get('visualization', {})
    run_params = config.get('run_control', {})

    # --- Component Initialization ---
    # The visualizer comes first since it determines the viewport size.
    visualizer = Visualizer(vis_params, caption="Voronoi Balls")
    width, height = visualizer.size
    simulation = Simulation(width, height, sim_params)
    scheduler = ClockScheduler(visualizer.fps)
    events = EventRouter()
    app = VoronoiBallsApp(simulation, visualizer.renderer, scheduler, events, present=visualizer.present)

    def on_quit(event):
        logging.info("Quit event received. Shutting down visualizer.")
        app.stop()

    def on_escape(event):
        if event.key == pygame.K_ESCAPE:
            logging.info("ESC key pressed. Shutting down visualizer.")
            app.stop()

    events.add_listener(pygame.QUIT, on_quit)
    events.add_listener(pygame.KEYDOWN, on_escape)

    log_throttle = max(1, run_params.get('log_throttle_frames', 300))
    max_frames = run_params.get('max_frames', 0)

    app.start()
    while app.running:
        events.pump(visualizer.poll_events())
        if not scheduler.run_pending():
            break

        # Hot loops must throttle logs
        if app.frames_drawn % log_throttle == 0:
            avg_speed = np.mean(np.linalg.norm(simulation.particles.velocities, axis=1))
            logging.info(f"Frame {app.frames_drawn} | FPS: {scheduler.clock.get_fps():.1f}")
            logging.debug(
                f"Frame {app.frames_drawn} | Balls: {simulation.particles.particle_count} | "
                f"Average Speed: {avg_speed:.4f}"
            )

        if max_frames and app.frames_drawn >= max_frames:
            logging.info(f"Reached max_frames ({max_frames}). Stopping animation.")
            app.stop()

    events.clear()
    visualizer.close()


def run_jitter(config: dict) -> None:
    """
    Runs the jittering points variant. The last frame stays on screen after
    the duration budget is spent, until the user quits.
    """
    from visualization import Visualizer
    from scheduler import IntervalTimer
    from scene import VectorScene
    from jitter import JitterField, JitterAnimation
    from constants import JITTER_NUM_POINTS, JITTER_INTERVAL_MS, JITTER_AMPLITUDE

    jitter_params = config.get('jitter', {})
    vis_params = config.get('visualization', {})

    # The jitter field keeps its initial size, so the window does too
    visualizer = Visualizer(vis_params, caption="Voronoi Jitter", resizable=False)
    width, height = visualizer.size
    rng = np.random.default_rng(jitter_params.get('seed'))
    field = JitterField(
        jitter_params.get('num_points', JITTER_NUM_POINTS), width, height, rng,
        amplitude=jitter_params.get('amplitude', JITTER_AMPLITUDE)
    )
    scene = VectorScene(width, height)
    timer = IntervalTimer(jitter_params.get('interval_ms', JITTER_INTERVAL_MS))

    def present(current_scene: VectorScene) -> None:
        current_scene.render(visualizer.renderer.surface)
        visualizer.present()

    animation = JitterAnimation(field, scene, timer, present=present)
    clock = pygame.time.Clock()

    animation.start(pygame.time.get_ticks())
    running = True
    while running:
        for event in visualizer.poll_events():
            if event.type == pygame.QUIT or (event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE):
                logging.info("Quit requested. Shutting down visualizer.")
                running = False
        timer.poll(pygame.time.get_ticks())
        clock.tick(visualizer.fps)

    animation.stop()

    svg_output = jitter_params.get('svg_output')
    if svg_output:
        with open(svg_output, 'w') as f:
            f.write(scene.to_svg())
        logging.info(f"Final jitter scene written to {svg_output}.")

    visualizer.close()


def main():
    """
    The main function to run the animation.
    """
    # Load configuration from the JSON file first.
    # Logging is not set up yet, so we use a print for this one error.
    try:
        config = load_config('config.json')
    except Exception as e:
        print(f"FATAL: Could not load config.json. Error: {e}")
        return

    setup_logging(config)

    logging.info("--- Voronoi Balls Starting ---")

    run_params = config.get('run_control', {})
    mode = run_params.get('mode', 'balls')
    runners = {'balls': run_balls, 'jitter': run_jitter}
    if mode not in runners:
        logging.critical(f"Unknown run mode '{mode}'. Expected one of {sorted(runners)}.")
        return

    profiler = cProfile.Profile() if run_params.get('profile', False) else None

    if profiler is not None:
        profiler.enable()
    runners[mode](config)
    if profiler is not None:
        profiler.disable()

        logging.info("--- Performance Profile ---")
        s = io.StringIO()
        # Sort by cumulative time spent in the function
        stats = pstats.Stats(profiler, stream=s).sort_stats('cumtime')
        stats.print_stats(20)
        logging.info(f"\n{s.getvalue()}")

    logging.info("--- Voronoi Balls Shutting Down ---")


if __name__ == "__main__":
    main()
