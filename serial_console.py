#!/usr/bin/env python3
"""
Bench console for the TV serial protocol.

Type a raw command such as ``POWR1`` or ``VOLM20``; it is padded to the
8-character frame, terminated and sent. Replies are printed as they arrive.

Usage: python serial_console.py [/dev/ttyUSB0]
"""
import sys
import threading

import serial

from tvcontrol.catalog import FRAME_WIDTH, TERMINATOR, encode_frame
from tvcontrol.config_tv import SerialSettings


def reader(ser: serial.Serial, stop: threading.Event) -> None:
    while not stop.is_set():
        try:
            reply = ser.read_until(TERMINATOR.encode("ascii"))
        except serial.SerialException as e:
            print(f"RX error: {e}")
            return
        if reply:
            print("RX:", reply.decode("ascii", errors="replace").rstrip(TERMINATOR))


def main() -> None:
    settings = SerialSettings(port=sys.argv[1]) if len(sys.argv) >= 2 else SerialSettings()

    try:
        ser = serial.Serial(settings.port, settings.baudrate, bytesize=settings.bytesize,
                            parity=settings.parity, stopbits=settings.stopbits,
                            timeout=settings.timeout)
    except serial.SerialException as e:
        print(f"Error opening {settings.port}: {e}")
        sys.exit(1)

    print(f"Opened {settings.port} @ {settings.baudrate} bps. 'exit' to quit.")
    stop = threading.Event()
    t = threading.Thread(target=reader, args=(ser, stop), daemon=True)
    t.start()
    try:
        while True:
            line = input("TX> ").strip()
            if not line:
                continue
            if line.lower() in ("exit", "quit"):
                break
            if len(line) > FRAME_WIDTH or not line.isascii():
                print(f"Commands are at most {FRAME_WIDTH} ASCII characters.")
                continue
            frame = encode_frame(line.upper().ljust(FRAME_WIDTH))
            ser.write(frame)
            print("TX:", repr(frame))
    except (KeyboardInterrupt, EOFError):
        pass
    finally:
        stop.set()
        t.join(timeout=settings.timeout * 2)
        ser.close()


if __name__ == "__main__":
    main()
