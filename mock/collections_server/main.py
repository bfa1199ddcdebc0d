from fastapi import FastAPI, HTTPException
from fastapi.responses import Response
from pathlib import Path
import os

app = FastAPI(title="Mock Collections Server", version="1.0.0")
# Support both local development and Docker
DATA_DIR = Path("/collections_stub") if os.path.exists("/collections_stub") else Path(__file__).resolve().parents[1] / "collections_stub"
COLLECTIONS = {"debts", "payment_plans", "payments"}

@app.get("/health")
def health(): return {"status": "ok"}

@app.get("/{collection}")
def get_collection(collection: str):
    file = DATA_DIR / f"{collection}.json"
    if collection not in COLLECTIONS or not file.exists():
        raise HTTPException(status_code=404, detail="collection not found")
    # Served verbatim so decimal literals reach the client untouched
    return Response(content=file.read_text(), media_type="application/json")
