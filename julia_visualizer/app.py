"""
Main application module for the Julia set visualizer.

Contains the JuliaApp class which handles:
- Window setup and main loop
- Translating keyboard and mouse input into view commands
- Rendering a fresh frame every tick and displaying it
"""

import logging

import pygame

from .config import load_settings
from .renderer import FrameRenderer
from .view import ViewCommand, ViewController, ViewState

logger = logging.getLogger(__name__)


# Key bindings: key -> (command, args)
KEY_BINDINGS = {
    pygame.K_LEFT: (ViewCommand.PAN, (1, 0)),
    pygame.K_RIGHT: (ViewCommand.PAN, (-1, 0)),
    pygame.K_UP: (ViewCommand.PAN, (0, 1)),
    pygame.K_DOWN: (ViewCommand.PAN, (0, -1)),
    pygame.K_EQUALS: (ViewCommand.ZOOM_IN, ()),
    pygame.K_PLUS: (ViewCommand.ZOOM_IN, ()),
    pygame.K_KP_PLUS: (ViewCommand.ZOOM_IN, ()),
    pygame.K_MINUS: (ViewCommand.ZOOM_OUT, ()),
    pygame.K_KP_MINUS: (ViewCommand.ZOOM_OUT, ()),
    pygame.K_a: (ViewCommand.ADJUST_PARAMETER, (-1, 0)),
    pygame.K_d: (ViewCommand.ADJUST_PARAMETER, (1, 0)),
    pygame.K_w: (ViewCommand.ADJUST_PARAMETER, (0, 1)),
    pygame.K_s: (ViewCommand.ADJUST_PARAMETER, (0, -1)),
    pygame.K_c: (ViewCommand.TOGGLE_COLOR_MODE, ()),
}


def command_for_key(key):
    """Look up the view command bound to a key, or None."""
    return KEY_BINDINGS.get(key)


class JuliaApp:
    """
    Main application class for the Julia set visualizer.

    Handles the pygame window and the event loop. Every tick it applies
    the queued view commands, renders a new frame for the current window
    size and blits it.
    """

    FPS = 30
    KEY_REPEAT_DELAY_MS = 200
    KEY_REPEAT_INTERVAL_MS = 40

    def __init__(self, settings=None):
        """
        Initialize the application.

        Args:
            settings: Settings to run with (default: load settings.json)
        """
        self.settings = settings or load_settings()
        self.width = self.settings.width
        self.height = self.settings.height

        state = ViewState(
            center_shift=(self.width / 2, self.height / 2),
            zoom=self.settings.zoom,
            parameter=self.settings.parameter,
            color_mode=self.settings.color_mode,
        )
        self.controller = ViewController(
            state=state,
            zoom_factor=self.settings.zoom_factor,
            pan_step=self.settings.pan_step,
            parameter_step=self.settings.parameter_step,
        )
        self.renderer = FrameRenderer.from_settings(self.settings)

        # Pygame state (initialized in run())
        self.screen = None
        self.clock = None
        self.running = False

    def run(self):
        """Run the application main loop."""
        self._init_pygame()
        self._warmup()

        self.running = True
        while self.running:
            self._handle_events()
            self.controller.apply_pending()
            self._draw()
            self.clock.tick(self.FPS)

        pygame.quit()

    def _init_pygame(self):
        """Initialize pygame and create a resizable window."""
        pygame.init()
        self.screen = pygame.display.set_mode(
            (self.width, self.height),
            pygame.RESIZABLE
        )
        pygame.key.set_repeat(self.KEY_REPEAT_DELAY_MS, self.KEY_REPEAT_INTERVAL_MS)
        self.clock = pygame.time.Clock()
        logger.info("Window %dx%d, max_iter=%d, supersample=%d",
                    self.width, self.height, self.renderer.max_iter,
                    self.renderer.supersample)

    def _warmup(self):
        """Compile the JIT kernels before the first real frame."""
        pygame.display.set_caption("Compiling (first run only)...")
        logger.info("Warming up JIT kernels")
        self.renderer.warmup()

    def _handle_events(self):
        """Turn pending pygame events into view commands."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.VIDEORESIZE:
                self._handle_resize(event)
            elif event.type == pygame.MOUSEWHEEL:
                command = ViewCommand.ZOOM_IN if event.y > 0 else ViewCommand.ZOOM_OUT
                self.controller.submit(command)
            elif event.type == pygame.KEYDOWN:
                self._handle_key(event)

    def _handle_key(self, event):
        """Handle keyboard input."""
        if event.key == pygame.K_ESCAPE:
            self.running = False
        elif event.key == pygame.K_r:
            self.controller.submit(ViewCommand.RESET, (self.width / 2, self.height / 2))
        else:
            binding = command_for_key(event.key)
            if binding is not None:
                command, args = binding
                self.controller.submit(command, *args)

    def _handle_resize(self, event):
        """Track the new window size; it is re-read by the next render."""
        self.width, self.height = event.w, event.h
        self.screen = pygame.display.set_mode((self.width, self.height), pygame.RESIZABLE)
        logger.info("Window resized to %dx%d", self.width, self.height)

    def _draw(self):
        """Render and display one frame."""
        frame = self.renderer.render(self.controller.state, self.width, self.height)
        surface = pygame.surfarray.make_surface(frame[:, :, :3].swapaxes(0, 1))
        self.screen.blit(surface, (0, 0))
        pygame.display.flip()
        self._update_caption()

    def _update_caption(self):
        state = self.controller.state
        pygame.display.set_caption(
            f"Julia set c = {state.parameter} | zoom {state.zoom:.3g} | "
            f"{state.color_mode.value} | {self.renderer.last_frame_time * 1000:.0f} ms"
        )


def run(settings=None):
    """
    Run the Julia set visualizer.

    Args:
        settings: Settings to use (default: load settings.json)
    """
    app = JuliaApp(settings)
    try:
        app.run()
    except KeyboardInterrupt:
        pygame.quit()
