"""
Replay Lab.
Feeds a recorded tick log through the commit engine to tune THRESHOLD / HOLD_MS offline.

CSV columns: t_ms,label,confidence  (blank label or confidence = failed tick)
"""
import argparse
import os
import sys

import pandas as pd

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from signscribe.config import CONFIG, EngineConfig, WORD_GAP_MS
from signscribe.core.types import Prediction
from signscribe.session import TranslatorSession
from signscribe.text_sink import MemoryTextSink


def load_ticks(path):
    df = pd.read_csv(path)
    missing = {"t_ms", "label", "confidence"} - set(df.columns)
    if missing:
        raise ValueError(f"tick log missing columns: {sorted(missing)}")
    return df.sort_values("t_ms", kind="stable")


def replay(df, config: EngineConfig, flush: bool = False):
    session = TranslatorSession(MemoryTextSink(), config)
    session.start()

    events = []
    last_t = 0.0
    for row in df.itertuples(index=False):
        now = float(row.t_ms)
        last_t = now
        if pd.isna(row.label) or pd.isna(row.confidence):
            actions = session.poll(now)
        else:
            actions = session.tick(Prediction(str(row.label).strip(), float(row.confidence)), now)
        events.extend((now, a) for a in actions)

    if flush:
        now = last_t + WORD_GAP_MS
        events.extend((now, a) for a in session.poll(now))

    return session.text, events


def run_lab():
    parser = argparse.ArgumentParser(description="Replay a tick log through the commit engine.")
    parser.add_argument("csv")
    parser.add_argument("--threshold", type=float, default=CONFIG["THRESHOLD"])
    parser.add_argument("--hold-ms", type=int, default=CONFIG["HOLD_MS"])
    parser.add_argument("--flush", action="store_true", help="let the final word gap elapse")
    args = parser.parse_args()

    config = EngineConfig(args.threshold, args.hold_ms)
    print(f"⏱️ REPLAY LAB  {config}")

    text, events = replay(load_ticks(args.csv), config, flush=args.flush)
    for t, action in events:
        print(f"  {t:>8.0f}ms  {action.kind.name:<14} {action.text!r}")
    print(f"📝 TEXT: {text!r}")


if __name__ == "__main__":
    run_lab()
