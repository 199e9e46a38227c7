from dataclasses import dataclass

from lent.screen import CalendarScreen


@dataclass
class DashboardContext:
    screen: CalendarScreen
    user_email: str
    user_name: str = ""
