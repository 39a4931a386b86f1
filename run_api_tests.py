import urllib.request
import urllib.error
import json
import uuid

BASE = "http://localhost:8000/api/v1"

def post(path, body=None):
    data = json.dumps(body or {}).encode()
    req = urllib.request.Request(
        f"{BASE}{path}",
        data=data,
        headers={"Content-Type": "application/json"}
    )
    try:
        with urllib.request.urlopen(req) as r:
            return json.loads(r.read())
    except urllib.error.HTTPError as e:
        return json.loads(e.read())

def get(path, params=None):
    url = f"{BASE}{path}"
    if params:
        url += "?" + "&".join(f"{k}={v}" for k, v in params.items())
    req = urllib.request.Request(url)
    try:
        with urllib.request.urlopen(req) as r:
            return json.loads(r.read())
    except urllib.error.HTTPError as e:
        return json.loads(e.read())

def section(title):
    print(f"\n{'='*60}")
    print(f"### {title} ###")
    print('='*60)

def label(name):
    print(f"\n--- {name} ---")

def out(data):
    print(json.dumps(data, indent=2, ensure_ascii=False))

def order(user_id, account_id, buy_sell, qty, price=None, order_type="Limit", symbol="AAPL"):
    body = {
        "user_id": user_id,
        "account_id": account_id,
        "symbol": symbol,
        "buy_sell": buy_sell,
        "order_type": order_type,
        "qty": qty,
    }
    if price is not None:
        body["price"] = price
    r = post("/orders", body)
    out(r)
    return (r.get("data") or {}).get("order", {}).get("order_id")

# ── Setup ──────────────────────────────────────────────────────
section("SETUP — FRESH USER")

uid = uuid.uuid4().hex[:6]
label("Create user")
r = post("/users", {"name": "Smoke Tester", "username": f"smoke_{uid}", "email": f"smoke_{uid}@test.com"})
out(r)
USER = r["data"]["user_id"]
ACCT = r["data"]["default_account_id"]

label("Deposit 1000")
out(post(f"/accounts/{ACCT}/deposit", {"amount": "1000"}))

# ── T1 Scenarios ───────────────────────────────────────────────
section("T1 — BUY / SELL SCENARIOS")

label("T1-A: Buy 10 AAPL @ 50, confirm → cash 500")
o = order(USER, ACCT, "Buy", "10", "50")
out(post(f"/orders/{o}/confirm"))

label("T1-B: Buy 10 AAPL @ 70 → InsufficientFunds")
order(USER, ACCT, "Buy", "10", "70")

label("T1-C: Sell 4 AAPL @ 60, confirm → cash 740, position 6")
o = order(USER, ACCT, "Sell", "4", "60")
out(post(f"/orders/{o}/confirm"))
out(get("/positions/AAPL", {"user_id": USER}))

label("T1-D: Sell 6 AAPL @ 55, confirm → position closed")
o = order(USER, ACCT, "Sell", "6", "55")
out(post(f"/orders/{o}/confirm"))
out(get("/positions", {"user_id": USER}))

# ── T2 Lifecycle ───────────────────────────────────────────────
section("T2 — LIFECYCLE GUARDRAILS")

label("T2-1: Place, update qty, cancel, confirm → InvalidState")
o = order(USER, ACCT, "Buy", "1", "10")
out(post(f"/orders/{o}/update", {"qty": "2"}))
out(post(f"/orders/{o}/cancel"))
out(post(f"/orders/{o}/confirm"))

label("T2-2: Update with no fields → NoChanges")
o = order(USER, ACCT, "Buy", "1", "10")
out(post(f"/orders/{o}/update", {}))

label("T2-3: Limit price on Market Open → InvalidOrderType")
out(post(f"/orders/{o}/update", {"order_type": "Market Open", "limit_price": "9"}))

label("T2-4: Reject, then confirm → InvalidState")
out(post(f"/orders/{o}/reject"))
out(post(f"/orders/{o}/confirm"))

label("T2-5: Market Open without price (price oracle)")
order(USER, ACCT, "Buy", "1", order_type="Market Open")

label("T2-6: Sell with no holdings → NoHoldings on confirm")
o = order(USER, ACCT, "Sell", "1", "10", symbol="SPY")
out(post(f"/orders/{o}/confirm"))

# ── T3 Read side ───────────────────────────────────────────────
section("T3 — READ SIDE")

label("T3-1: List orders (limit=3)")
out(get("/orders", {"user_id": USER, "limit": 3}))

label("T3-2: Transactions with summary")
out(get("/transactions", {"user_id": USER}))

label("T3-3: Accounts")
out(get("/accounts", {"user_id": USER}))

label("T3-4: Asset catalog")
out(get("/assets"))

label("T3-5: Unknown asset")
out(get("/assets/ZZZZ"))

print("\n\n=== ALL TESTS COMPLETE ===\n")
