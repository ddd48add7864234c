from datetime import datetime, timezone
from typing import Optional

from fastapi import Body, FastAPI, HTTPException
from fastapi.responses import JSONResponse
from pathlib import Path
import json
import os

app = FastAPI(title="Mock ERP Server", version="1.0.0")
# Support both local development and Docker
DATA_DIR = Path("/erp_stub") if os.path.exists("/erp_stub") else Path(__file__).resolve().parents[1] / "erp_stub"

sync_logs: list = []


def load(name: str) -> list:
    return json.loads((DATA_DIR / f"{name}.json").read_text())


@app.get("/health")
def health(): return {"status": "ok"}

@app.get("/api/transactions")
def get_transactions(type: Optional[str] = None, partyId: Optional[int] = None):
    transactions = load("transactions")
    if partyId is not None:
        transactions = [t for t in transactions if t.get("partyId") == partyId]
    elif type:
        transactions = [t for t in transactions if t["transactionType"] == type]
    return JSONResponse(content=transactions)

@app.get("/api/parties")
def get_parties(type: Optional[str] = None):
    parties = load("parties")
    if type:
        parties = [p for p in parties if p["type"] == type]
    return JSONResponse(content=parties)

@app.get("/api/parties/{party_id}")
def get_party(party_id: int):
    for party in load("parties"):
        if party["id"] == party_id:
            return JSONResponse(content=party)
    raise HTTPException(status_code=404, detail="Party not found")

@app.get("/api/bnpl-limits")
def get_bnpl_limits(type: Optional[str] = None):
    limits = load("bnpl_limits")
    if type:
        limits = [l for l in limits if l["limitType"] == type]
    return JSONResponse(content=limits)

@app.get("/api/tally-sync/latest")
def get_latest_sync():
    logs = load("tally_sync_logs") + sync_logs
    if not logs:
        raise HTTPException(status_code=404, detail="No sync logs found")
    return JSONResponse(content=logs[-1])

@app.post("/api/tally-sync", status_code=201)
def trigger_sync(body: dict = Body(...)):
    sync_type = body.get("syncType") or "pull"
    log = {
        "id": 100 + len(sync_logs),
        "syncType": sync_type,
        "syncStatus": "success",
        "transactionCount": 12,
        "details": f"Successfully {sync_type}ed transactions with Tally",
        "syncedAt": datetime.now(timezone.utc).isoformat(),
    }
    sync_logs.append(log)
    return log
