import logging
import os
import sys
from pathlib import Path

from logring.core import log
from logring.core.metrics import force_emit
from logring.wire_config import build_from_yaml, detach


def main():
    log.setup()
    lg = log.get("demo.ringlog")
    lg.setLevel(logging.DEBUG)

    cfg = os.getenv("LOGRING_CONFIG", str(Path(__file__).with_name("ringlog.yaml")))
    handlers = build_from_yaml(cfg)

    # เดโม่ยิง log เกินความจุ ให้เห็นว่าหัวถูกทิ้ง
    for i in range(20):
        lg.debug("tick %d", i)
        if i % 7 == 0:
            lg.warning("slow tick %d", i)

    for h in handlers:
        print(f"--- {h!r}")
        h.dump(sys.stdout)

    force_emit(logger=log.get("metrics"), json_mode=(os.getenv("LOG_JSON", "0") == "1"))
    detach(handlers)


if __name__ == "__main__":
    main()
