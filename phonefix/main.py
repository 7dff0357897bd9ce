from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from phonefix.routes.phones import router as phones_router
from phonefix.routes.conversion import router as conversion_router

app = FastAPI(title="PhoneFix API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
def root():
    return {"message": "PhoneFix API is running", "version": "1.0.0"}


@app.get("/health")
def health():
    return {"status": "healthy"}


app.include_router(phones_router)
app.include_router(conversion_router)
