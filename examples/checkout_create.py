from __future__ import annotations
import argparse
from _common import add_common_args, make_client_from_args, pretty
from billingio import CheckoutsAPI, BillingIOAPIError
from billingio.utils import ensure_idempotency_key

def main():
    ap = argparse.ArgumentParser(description="Create a crypto checkout")
    add_common_args(ap)
    ap.add_argument("--amount", required=True, type=float, help="Amount in USD")
    ap.add_argument("--chain", default="tron", help="tron | arbitrum")
    ap.add_argument("--token", default="USDT", help="USDT | USDC")
    ap.add_argument("--expires-in", type=int, default=None, help="Seconds until the checkout expires")
    ap.add_argument("--idempotency-key", default=None, help="Optional Idempotency-Key")
    args = ap.parse_args()

    idem = ensure_idempotency_key(args.idempotency_key, prefix="co")
    print("[RUN] Creating checkout")
    print(f"  amount    : {args.amount}")
    print(f"  chain     : {args.chain}")
    print(f"  token     : {args.token}")
    print(f"  idem-key  : {idem}")

    client = make_client_from_args(args)
    try:
        try:
            co = CheckoutsAPI(client).create(
                amount_usd=args.amount,
                chain=args.chain,
                token=args.token,
                expires_in_seconds=args.expires_in,
                idempotency_key=idem,
            )
            print(pretty(co.model_dump(mode="json")))
            print(f"\n[RUN] Send {co.amount_usd} {args.token} to {co.deposit_address}")
        except BillingIOAPIError as e:
            print(f"[RUN] HTTP ERROR ❌ status={e.status} code={e.code} req_id={e.request_id}")
            print(f"[RUN] {e.message_text}")
    finally:
        client.close()

if __name__ == "__main__":
    main()
