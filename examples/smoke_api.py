from __future__ import annotations
import argparse
from _common import add_common_args, make_client_from_args, pretty
from billingio import HealthAPI, BillingIOAPIError

def main():
    ap = argparse.ArgumentParser(description="Quick GET /health smoke test")
    add_common_args(ap)
    args = ap.parse_args()

    client = make_client_from_args(args)
    try:
        print("[SMOKE] GET /health")
        try:
            health = HealthAPI(client).get()
            print(pretty(health.model_dump(mode="json")))
            print("\n[SMOKE] OK ✅")
        except BillingIOAPIError as e:
            print(f"[SMOKE] HTTP {e.status} req_id={e.request_id}")
            print(pretty(e.to_dict()))
    finally:
        client.close()

if __name__ == "__main__":
    main()
