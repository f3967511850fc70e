from __future__ import annotations
import argparse
from _common import add_common_args, make_client_from_args, pretty
from billingio import CheckoutsAPI, BillingIOAPIError

def main():
    ap = argparse.ArgumentParser(description="Walk every checkout (auto-pagination)")
    add_common_args(ap)
    ap.add_argument("--status", default=None, help="Filter by status (pending, confirmed, ...)")
    ap.add_argument("--limit", type=int, default=None, help="Page size")
    ap.add_argument("--max", type=int, default=None, help="Stop after this many items")
    args = ap.parse_args()

    client = make_client_from_args(args)
    try:
        it = CheckoutsAPI(client).list_auto_paginate(status=args.status, limit=args.limit)
        count = 0
        while it.advance():
            co = it.current()
            count += 1
            status = getattr(co.status, 'value', co.status) or '-'
            print(f"{co.checkout_id:<24} {status:<12} {co.amount_usd}")
            if args.max and count >= args.max:
                break

        err = it.last_error()
        if isinstance(err, BillingIOAPIError):
            print(f"[LIST] HTTP {err.status} req_id={err.request_id}")
            print(pretty(err.to_dict()))
        elif err is not None:
            raise err
        print(f"\n[LIST] {count} checkout(s)")
    finally:
        client.close()

if __name__ == "__main__":
    main()
