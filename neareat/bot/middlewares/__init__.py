from neareat.bot.middlewares.search_session import SearchSessionMiddleware
from neareat.bot.middlewares.throttle import ThrottleMiddleware

__all__ = [
    "SearchSessionMiddleware",
    "ThrottleMiddleware",
]
