# storage/udp_sender.py
import json
import logging
import socket

from config import UDP_HOST, UDP_PORT

log = logging.getLogger(__name__)


def result_payload(t, result, compact=True):
    """JSON-ready message for one inference; compact drops sampled curves."""
    payload = {"t": t}
    if compact:
        payload.update(result.metrics.as_dict())
        payload.update(result.parameters.as_dict())
        payload["fired_rules"] = result.fired_rule_ids
        payload["strengths"] = [fr.firing_strength for fr in result.fired_rules]
    else:
        payload.update(result.to_dict())
    return payload


class UdpSender:
    def __init__(self, host=UDP_HOST, port=UDP_PORT):
        self.addr = (host, port)
        self.sock = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)

    def send(self, payload: dict):
        msg = json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
        self.sock.sendto(msg, self.addr)

    def send_result(self, t, result):
        try:
            self.send(result_payload(t, result))
        except OSError as e:
            log.warning(f"UDP send to {self.addr} failed: {e}")

    def close(self):
        try:
            self.sock.close()
        except OSError:
            pass
