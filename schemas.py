"""
Database Schemas for Inflective

Query and recommendation bodies are stored exactly as the client sends
them, so those collections have no Pydantic model. The documents usually
look like this:

- myQueryCollection: ProductName, ProductBrand, ProductImage, QueryTitle,
  Reason, UserEmail (owner), UserName, currentDate, recommendationCount
- recommendationCollection: QueryId (string form of a query _id, not
  checked), UserEmail (query owner), RecommenderEmail, plus free-form
  recommendation fields
"""

from pydantic import BaseModel, ConfigDict


class TokenRequest(BaseModel):
    model_config = ConfigDict(extra="allow")

    email: str


# Fields replaced by PUT /updateQuery/{id}; anything else in the body is ignored
QUERY_UPDATE_FIELDS = ("ProductName", "ProductBrand", "ProductImage", "QueryTitle", "Reason", "currentDate")

# Projection used by GET /myQueries
MY_QUERIES_PROJECTION = {"_id": 1, "QueryTitle": 1, "UserName": 1, "currentDate": 1}
