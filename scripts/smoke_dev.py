import argparse
import os
import sys

import requests

from _webhook_signing import canonical_json_bytes, payout_event, stripe_signature_header


def die(message, code=1):
    print(message)
    sys.exit(code)


def step(message):
    print("\n==> " + message)


def request(method, url, headers=None, json_body=None, data=None, params=None, allow_failure=False):
    try:
        resp = requests.request(method, url, headers=headers, json=json_body, data=data, params=params)
    except Exception as exc:
        die("Request failed: %s" % exc)
    if resp.status_code < 200 or resp.status_code >= 300:
        if not allow_failure:
            print("HTTP %s %s" % (resp.status_code, resp.reason))
            print(resp.text)
            sys.exit(1)
    return resp


def _safe_json(resp):
    try:
        return resp.json()
    except ValueError:
        return {}


def expect_status(resp, status, label):
    if resp.status_code != status:
        die("%s: expected HTTP %s, got %s: %s" % (label, status, resp.status_code, resp.text))
    print("%s ok (HTTP %s)" % (label, status))


def main():
    parser = argparse.ArgumentParser(description="Smoke test a running payout gateway")
    parser.add_argument("--base-url", default=os.getenv("BASE_URL", "http://localhost:4242"))
    parser.add_argument("--webhook-secret", default=os.getenv("STRIPE_WEBHOOK_SECRET", ""))
    parser.add_argument(
        "--create-payout",
        action="store_true",
        help="also create a real instant payout (needs a funded test-mode account)",
    )
    parser.add_argument("--amount", type=int, default=1000)
    args = parser.parse_args()
    base_url = args.base_url.rstrip("/")

    step("Health")
    resp = request("GET", base_url + "/health")
    if _safe_json(resp).get("status") != "OK":
        die("Unexpected health payload: %s" % resp.text)
    print(resp.json())

    step("Reject invalid payout amount")
    resp = request("POST", base_url + "/api/payout", json_body={"amount": 0}, allow_failure=True)
    expect_status(resp, 400, "amount=0")

    step("List payouts (limit clamps to 100)")
    resp = request("GET", base_url + "/api/payouts", params={"limit": 500}, allow_failure=True)
    body = _safe_json(resp)
    print("HTTP %s success=%s count=%s has_more=%s" % (
        resp.status_code,
        body.get("success"),
        len(body.get("payouts") or []),
        body.get("has_more"),
    ))

    step("Reject malformed created range")
    resp = request("GET", base_url + "/api/payouts", params={"created": "abc..def"}, allow_failure=True)
    expect_status(resp, 400, "created=abc..def")

    if args.create_payout:
        step("Create instant payout amount=%s" % args.amount)
        resp = request("POST", base_url + "/api/payout", json_body={"amount": args.amount}, allow_failure=True)
        body = _safe_json(resp)
        print("HTTP %s %s" % (resp.status_code, body))
        payout_id = (body.get("payout") or {}).get("id")
        if payout_id:
            step("Retrieve payout %s" % payout_id)
            resp = request("GET", base_url + "/api/payout/" + payout_id)
            print(resp.json())

    step("Unknown payout -> 404")
    resp = request("GET", base_url + "/api/payout/po_does_not_exist", allow_failure=True)
    print("HTTP %s %s" % (resp.status_code, resp.text))

    if args.webhook_secret:
        step("Signed webhook payout.paid")
        event = payout_event("payout.paid", {"id": "po_smoke", "amount": 1000, "currency": "usd", "status": "paid"})
        body_bytes = canonical_json_bytes(event)
        headers = stripe_signature_header(args.webhook_secret, body_bytes)
        headers["Content-Type"] = "application/json"
        resp = request("POST", base_url + "/api/webhook", headers=headers, data=body_bytes, allow_failure=True)
        expect_status(resp, 200, "signed webhook")

        step("Tampered webhook")
        headers = stripe_signature_header("wrong_secret", body_bytes)
        headers["Content-Type"] = "application/json"
        resp = request("POST", base_url + "/api/webhook", headers=headers, data=body_bytes, allow_failure=True)
        expect_status(resp, 400, "tampered webhook")
    else:
        print("\n(skipping webhook checks: no STRIPE_WEBHOOK_SECRET)")

    print("\nSmoke test finished.")


if __name__ == "__main__":
    main()
