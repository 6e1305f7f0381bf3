#!/usr/bin/env python3
from __future__ import annotations

import argparse
import socket


def main() -> int:
    ap = argparse.ArgumentParser(description="UDP echo server (udpecho test target)")
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=7007)
    ap.add_argument("--reply", default=None, help="Answer with this text instead of echoing")
    ap.add_argument("--once", action="store_true", help="Exit after the first datagram")
    args = ap.parse_args()

    family = socket.AF_INET6 if ":" in args.host else socket.AF_INET
    sock = socket.socket(family, socket.SOCK_DGRAM)
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    sock.bind((args.host, args.port))
    print(f"udp_echo listening on {args.host}:{args.port}")

    with sock:
        while True:
            data, addr = sock.recvfrom(65535)
            print(f"{addr[0]}:{addr[1]} -> {len(data)} bytes")
            sock.sendto(data if args.reply is None else args.reply.encode("utf-8"), addr)
            if args.once:
                return 0


if __name__ == "__main__":
    raise SystemExit(main())
