"""Dashboard state: cells, reducer, forms, cart and timers."""

from pyrfid.state.cart import Cart, CartLine
from pyrfid.state.cells import Cell, MarkerCell
from pyrfid.state.dashboard import AlertToast, Dashboard, DashboardService, View
from pyrfid.state.forms import FormMode, FormPhase, FormState
from pyrfid.state.messages import Messages
from pyrfid.state.timers import ExpiringSlot

__all__ = [
    "AlertToast",
    "Cart",
    "CartLine",
    "Cell",
    "Dashboard",
    "DashboardService",
    "ExpiringSlot",
    "FormMode",
    "FormPhase",
    "FormState",
    "MarkerCell",
    "Messages",
    "View",
]
