"""Banner carousel state for the storefront page.

The server decides which slide a page opens on and the timing the browser
runs with. Bootstrap's carousel plugin does the cycling: it advances every
``interval`` seconds, wraps around, restarts the interval after manual
navigation and ignores prev/next while a slide is still moving, which lasts
``transition`` seconds.
"""


class BannerCarousel:
    """Slides in display order plus the slide a page starts on."""

    def __init__(self, banners, interval=10.0, transition=0.5):
        self.slides = sorted(banners, key=lambda banner: banner.display_order)
        self.interval = interval
        self.transition = transition
        self.index = 0

    def __len__(self):
        return len(self.slides)

    @property
    def current(self):
        if not self.slides:
            return None
        return self.slides[self.index]

    @property
    def interval_ms(self):
        return int(self.interval * 1000)

    @property
    def next_index(self):
        if not self.slides:
            return 0
        return (self.index + 1) % len(self)

    @property
    def previous_index(self):
        if not self.slides:
            return 0
        return (self.index - 1) % len(self)

    def go_to(self, index):
        """Start on slide ``index``. Returns False for the current or an unknown slide."""
        if index == self.index or not 0 <= index < len(self):
            return False
        self.index = index
        return True
