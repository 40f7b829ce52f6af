from fastapi import APIRouter

from . import authors, books, categories, countries, reviewers, reviews

api_router = APIRouter()
api_router.include_router(countries.router)
api_router.include_router(categories.router)
api_router.include_router(authors.router)
api_router.include_router(books.router)
api_router.include_router(reviewers.router)
api_router.include_router(reviews.router)
