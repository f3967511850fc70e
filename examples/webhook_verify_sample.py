from __future__ import annotations
import argparse, json, sys
from billingio import construct_event, generate_signature_header, WebhookVerificationError


def main():
    ap = argparse.ArgumentParser(
        description="Verify a webhook signature & parse payload (offline sample)"
    )
    ap.add_argument("--secret", required=True, help="Webhook signing secret (whsec_...)")
    ap.add_argument("--header", default=None, help="X-Billing-Signature value (t=...,v1=...)")
    ap.add_argument("--sign", action="store_true", help="Sign the file now instead of taking --header")
    ap.add_argument("--tolerance", type=int, default=300, help="Replay window in seconds (0 disables)")
    ap.add_argument("--file", required=True, help="Path to the raw JSON body")
    args = ap.parse_args()

    # Raw bytes; re-serializing the JSON would change the signature
    with open(args.file, "rb") as f:
        body = f.read()

    header = generate_signature_header(body, args.secret) if args.sign else args.header
    if args.sign:
        print("[WEBHOOK] Signed header:", header)
    headers = {"X-Billing-Signature": header or ""}

    try:
        ev = construct_event(body, headers, args.secret, tolerance=args.tolerance)
        print(json.dumps(ev.model_dump(mode="json"), ensure_ascii=False, indent=2))
        print("\n[WEBHOOK] OK ✅", f"({getattr(ev.type, 'value', ev.type)})")
    except WebhookVerificationError as e:
        print(f"[WEBHOOK] Verification failed ({e.kind.value}):", e.message)
        sys.exit(2)


if __name__ == "__main__":
    main()
