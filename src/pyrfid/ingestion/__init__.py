"""Push ingestion.

Turns raw STOMP frames into typed events and fans them out to any
number of in-process subscribers.
"""

from pyrfid.ingestion.push import PushFrame, TopicDemultiplexer, decode_alert, decode_rfid_message
from pyrfid.ingestion.streams import EventStream, Subscription, SubscriptionGroup

__all__ = [
    "EventStream",
    "PushFrame",
    "Subscription",
    "SubscriptionGroup",
    "TopicDemultiplexer",
    "decode_alert",
    "decode_rfid_message",
]
