"""
Navigation layer – executes dispatch results and follows redirects.
"""

from typing import Callable, List, Optional

from surfacegate.config import MAX_REDIRECT_HOPS
from surfacegate.dispatcher import Dispatcher
from surfacegate.models import DispatchResult, Identity, Redirect


class RedirectLoopError(RuntimeError):
    """Raised when a navigation keeps redirecting past the hop limit."""

    def __init__(self, chain: List[str]):
        super().__init__(f"Too many redirects: {' -> '.join(chain)}")
        self.chain = chain


class Navigator:
    """Drives a Dispatcher for one navigation context (one browser tab)."""

    def __init__(
        self,
        dispatcher: Dispatcher,
        on_render: Optional[Callable[[DispatchResult], None]] = None,
        max_hops: int = MAX_REDIRECT_HOPS,
    ):
        self.dispatcher = dispatcher
        self.on_render = on_render
        self.max_hops = max_hops
        self.history: List[str] = []
        self.last_chain: List[str] = []

    @property
    def session(self):
        return self.dispatcher.session

    def navigate_to(self, path: str) -> DispatchResult:
        chain = [path]
        result = self.dispatcher.dispatch(path)
        while isinstance(result, Redirect):
            if len(chain) > self.max_hops:
                raise RedirectLoopError(chain + [result.target_path])
            chain.append(result.target_path)
            result = self.dispatcher.dispatch(result.target_path)

        self.last_chain = chain
        self.history.append(chain[-1])
        if self.on_render is not None:
            self.on_render(result)
        return result

    def sign_in(self, identity: Identity, path: Optional[str] = None) -> DispatchResult:
        """Switch identity and land on *path*, or on the role's default page."""
        self.session.set_identity(identity)
        if path is None:
            path = self.dispatcher.landing_path(identity)
        return self.navigate_to(path)

    def sign_out(self) -> DispatchResult:
        """Clear the session and go to the logout page of the old surface."""
        target = self.dispatcher.logout_path()
        self.session.clear()
        return self.navigate_to(target)
