from datetime import date, datetime
from typing import Optional

from .categories import Vocabulary
from .colors import Colors
from .constants import DEFAULT_WEEK_START
from .models import Event, Granularity, ShareStatus
from .projector import Bucket, Projection
from .window import pad_to_weeks

WIDTH = 80
CELL_WIDTH = 11
DAY_NAMES = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
# hours always listed in the day view, others only when busy
WORKING_HOURS = range(8, 19)


class CalendarView:
    """Display a projected window in the terminal."""

    def __init__(
        self,
        projection: Projection,
        vocabulary: Vocabulary,
        week_start: int = DEFAULT_WEEK_START,
        now: Optional[datetime] = None,
    ) -> None:
        self.projection: Projection = projection
        self.vocabulary: Vocabulary = vocabulary
        self.week_start: int = week_start
        self.now: datetime = now or datetime.now()

    def format_time(self, dt: datetime) -> str:
        return dt.strftime("%H:%M")

    def truncate(self, text: str, n: int) -> str:
        return text if len(text) <= n else text[: n - 3] + "..."

    def title(self) -> str:
        window = self.projection.window
        if window.granularity is Granularity.MONTH:
            return window.start.strftime("%B %Y")
        if window.granularity is Granularity.WEEK:
            return (
                f"Week of {window.start.strftime('%b %d')} - "
                f"{window.end.strftime('%b %d, %Y')}"
            )
        return window.start.strftime("%A, %B %d, %Y")

    def _header(self) -> None:
        print(f"\n{Colors.BOLD}{'═'*WIDTH}{Colors.RESET}")
        print(f"{Colors.BOLD}{Colors.CYAN}{self.title().center(WIDTH)}{Colors.RESET}")
        print(f"{Colors.BOLD}{'═'*WIDTH}{Colors.RESET}")

    def _footer(self) -> None:
        total_text = f"Total events: {self.projection.total}"
        print(f"\n{Colors.BOLD}{'═'*WIDTH}{Colors.RESET}")
        print(f"{Colors.BOLD}{total_text.center(WIDTH)}{Colors.RESET}")

    def format_event(self, e: Event) -> str:
        """One line for an event: time range, colored title, course and shares."""
        start, end = self.format_time(e.start), self.format_time(e.end)
        time_range = start if start == end else f"{start} - {end}"
        info = self.vocabulary.info(e.category)
        color = Colors.DIM if e.end < self.now else Colors.for_category(info.color)
        line = (
            f"  {Colors.BLUE}{time_range:<15}{Colors.RESET}"
            f"{color}●{Colors.RESET} {e.title}"
        )
        if e.course:
            line += f" {Colors.DIM}({self.truncate(e.course, 30)}){Colors.RESET}"
        if e.shared_with:
            accepted = sum(1 for s in e.shared_with if s.status is ShareStatus.ACCEPTED)
            shared = f"[shared {accepted}/{len(e.shared_with)}]"
            line += f" {Colors.CYAN}{shared}{Colors.RESET}"
        return line

    def _print_bucket(self, bucket: Bucket) -> None:
        for e in bucket.visible:
            print(self.format_event(e))
            if e.location:
                location = self.truncate(e.location, 60)
                print(f"{Colors.CYAN}{' ' * 19}⚲ {location}{Colors.RESET}")
        if bucket.hidden_count:
            print(f"{Colors.DIM}  +{bucket.hidden_count} more{Colors.RESET}")

    def _day_heading(self, day: date) -> str:
        is_today = day == self.now.date()
        is_past = day < self.now.date()
        if is_today:
            day_color = Colors.GREEN
        else:
            day_color = Colors.DIM if is_past else Colors.WHITE
        return f"{Colors.BOLD}{day_color}{day.strftime('%A, %b %d')}{Colors.RESET}"

    def display_month_grid(self) -> None:
        window = self.projection.window
        counts = {b.key: len(b) for b in self.projection.days}
        names = DAY_NAMES[self.week_start:] + DAY_NAMES[: self.week_start]
        print("".join(name.center(CELL_WIDTH) for name in names))
        cells = pad_to_weeks(window, self.week_start)
        for i in range(0, len(cells), 7):
            row = []
            for day in cells[i : i + 7]:
                if not window.contains(day):
                    row.append(" " * CELL_WIDTH)
                    continue
                text = f"{day.day:>2}" + (f" •{counts[day]}" if counts[day] else "")
                text = text.center(CELL_WIDTH)
                if day == self.now.date():
                    text = f"{Colors.GREEN}{text}{Colors.RESET}"
                row.append(text)
            print("".join(row))

    def display(self) -> None:
        window = self.projection.window
        self._header()

        if window.granularity is Granularity.MONTH:
            self.display_month_grid()
            busy = [b for b in self.projection.days if b.events]
            for bucket in busy:
                print(f"\n{self._day_heading(bucket.key)}")
                print(f"{Colors.DIM}{'─'*WIDTH}{Colors.RESET}")
                self._print_bucket(bucket)
            if not busy:
                print(f"\n{Colors.DIM}  No events{Colors.RESET}")
        elif window.granularity is Granularity.WEEK:
            for bucket in self.projection.days:
                print(f"\n{self._day_heading(bucket.key)}")
                print(f"{Colors.DIM}{'─'*WIDTH}{Colors.RESET}")
                if bucket.events:
                    self._print_bucket(bucket)
                else:
                    print(f"{Colors.DIM}  No events{Colors.RESET}")
        else:
            print()
            for bucket in self.projection.hours:
                if not bucket.events and bucket.key not in WORKING_HOURS:
                    continue
                label = f"{bucket.key:02d}:00"
                rule = "─" * (WIDTH - 6)
                print(f"{Colors.DIM}{label} {rule}{Colors.RESET}")
                for e in bucket.events:
                    print(self.format_event(e))

        self._footer()
