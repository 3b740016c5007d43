from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import Depends, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from pymongo.database import Database

from auth import clear_token_cookie, create_access_token, require_owner, set_token_cookie, verify_token
from config import Settings, get_settings
from database import (
    QUERY_COLLECTION,
    RECOMMENDATION_COLLECTION,
    connect,
    delete_result,
    get_db,
    insert_result,
    sanitize,
    sanitize_many,
    to_obj_id,
    update_result,
)
from logging_config import RequestLoggingMiddleware, setup_logging
from schemas import MY_QUERIES_PROJECTION, QUERY_UPDATE_FIELDS, TokenRequest

settings = get_settings()
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    client = connect(settings)
    app.state.db = client[settings.database_name]
    try:
        yield
    finally:
        client.close()


# App and CORS
app = FastAPI(title="Inflective API", lifespan=lifespan)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


async def json_body(request: Request, user=Depends(verify_token)) -> Any:
    # Read only after the token check, so unauthenticated callers never reach body parsing
    return await request.json()


# Auth Routes
@app.post("/jwt")
def issue_token(payload: TokenRequest, response: Response, settings: Settings = Depends(get_settings)):
    token = create_access_token(payload.model_dump(), settings.access_token_secret)
    set_token_cookie(response, token, settings)
    return {"success": True}

@app.post("/logout")
def logout(settings: Settings = Depends(get_settings)):
    response = PlainTextResponse("cookie cleared")
    clear_token_cookie(response, settings)
    return response

# Query Routes
@app.post("/addQuery")
def add_query(payload=Depends(json_body), db: Database = Depends(get_db)):
    res = db[QUERY_COLLECTION].insert_one(payload)
    return insert_result(res)

@app.get("/allQueries")
def all_queries(searchText: str = "", db: Database = Depends(get_db)):
    q = {"ProductName": {"$regex": searchText, "$options": "i"}}
    return sanitize_many(db[QUERY_COLLECTION].find(q).sort([("currentDate", -1)]))

@app.get("/myQueries")
def my_queries(user=Depends(require_owner("email")), db: Database = Depends(get_db)):
    cursor = db[QUERY_COLLECTION].find({"UserEmail": user["email"]}, MY_QUERIES_PROJECTION).sort([("currentDate", -1)])
    return sanitize_many(cursor)

@app.get("/queryDetails/{id}")
def query_details(id: str, user=Depends(verify_token), db: Database = Depends(get_db)):
    return sanitize(db[QUERY_COLLECTION].find_one({"_id": to_obj_id(id)}))

@app.put("/updateQuery/{id}")
def update_query(id: str, payload=Depends(json_body), db: Database = Depends(get_db)):
    updated = {k: payload.get(k) for k in QUERY_UPDATE_FIELDS}
    res = db[QUERY_COLLECTION].update_one({"_id": to_obj_id(id)}, {"$set": updated})
    return update_result(res)

@app.delete("/deleteQuery/{id}")
def delete_query(id: str, user=Depends(verify_token), db: Database = Depends(get_db)):
    # Recommendations pointing at this query are left in place
    return delete_result(db[QUERY_COLLECTION].delete_one({"_id": to_obj_id(id)}))

@app.put("/updateRecommendationCount/{id}")
def update_recommendation_count(id: str, db: Database = Depends(get_db)):
    # Public on purpose: any viewer posting a recommendation bumps the count
    res = db[QUERY_COLLECTION].update_one({"_id": to_obj_id(id)}, {"$inc": {"recommendationCount": 1}})
    return update_result(res)

# Recommendation Routes
@app.post("/addRecommendation")
def add_recommendation(payload=Depends(json_body), db: Database = Depends(get_db)):
    res = db[RECOMMENDATION_COLLECTION].insert_one(payload)
    return insert_result(res)

@app.get("/allRecommendations")
def all_recommendations(queryId: Optional[str] = None, db: Database = Depends(get_db)):
    return sanitize_many(db[RECOMMENDATION_COLLECTION].find({"QueryId": queryId}))

@app.get("/myRecommendations")
def my_recommendations(user=Depends(require_owner("email")), db: Database = Depends(get_db)):
    return sanitize_many(db[RECOMMENDATION_COLLECTION].find({"RecommenderEmail": user["email"]}))

@app.get("/recommendations")
def recommendations_for_me(user=Depends(require_owner("email")), db: Database = Depends(get_db)):
    return sanitize_many(db[RECOMMENDATION_COLLECTION].find({"UserEmail": user["email"]}))

@app.delete("/deleteRecommendations/{id}")
def delete_recommendation(id: str, user=Depends(verify_token), db: Database = Depends(get_db)):
    return delete_result(db[RECOMMENDATION_COLLECTION].delete_one({"_id": to_obj_id(id)}))

# Utility endpoints
@app.get("/", response_class=PlainTextResponse)
def root():
    return "inflective server is running......"


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
