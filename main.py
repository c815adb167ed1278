import logging
import random
import sys

from fastapi import FastAPI, Depends
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy import Column, Date, Integer, String
from faker import Faker

from sqldatatables import Column as DataColumn
from sqldatatables import DataTables, DataTablesRequest, DataTablesResponse
from sqldatatables import datatables_request, respond
from sqldatatables.config import get_settings

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

# ----------------------
# Database setup
# ----------------------
engine = create_async_engine(settings.database_url, echo=settings.echo_sql, future=True)
async_session = sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)

Base = declarative_base()


async def get_db():
    async with async_session() as session:
        yield session


# ----------------------
# Models
# ----------------------
class Person(Base):
    __tablename__ = "person"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    nik = Column(String(16), nullable=False, unique=True)
    phone = Column(String(20), nullable=True)
    birth_date = Column(Date, nullable=True)
    place = Column(String(100), nullable=True)


PERSON_COLUMNS = [
    DataColumn(name="id"),
    DataColumn(name="name"),
    DataColumn(name="nik"),
    DataColumn(name="phone"),
    DataColumn(name="birth_date", display="DATE_FORMAT(birth_date, '%d-%m-%Y')"),
    DataColumn(name="place"),
]


# ----------------------
# FastAPI app
# ----------------------
app = FastAPI()
faker = Faker()


@app.on_event("startup")
async def on_startup():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


# ----------------------
# Insert 1000 random people
# ----------------------
@app.get("/seed")
async def seed_people():
    async with async_session() as session:
        people = [
            Person(
                name=faker.name(),
                nik=faker.unique.numerify("################"),
                phone=faker.phone_number()[:20] if random.random() > 0.1 else None,
                birth_date=faker.date_of_birth(minimum_age=18, maximum_age=80),
                place=faker.city(),
            )
            for _ in range(1000)
        ]
        session.add_all(people)
        await session.commit()
    return {"message": "1000 random people inserted successfully!"}


# ----------------------
# DataTables server-side endpoint
# ----------------------
@app.api_route("/data", methods=["GET", "POST"], response_model=DataTablesResponse)
async def get_people(
    request_data: DataTablesRequest = Depends(datatables_request),
    db: AsyncSession = Depends(get_db),
):
    datatable = DataTables(db, Person.__tablename__, PERSON_COLUMNS)
    return await respond(datatable, request_data)


# ----------------------
# People per place, grouped
# ----------------------
@app.api_route("/data/places", methods=["GET", "POST"], response_model=DataTablesResponse)
async def get_places(
    request_data: DataTablesRequest = Depends(datatables_request),
    db: AsyncSession = Depends(get_db),
):
    datatable = DataTables(
        db,
        Person.__tablename__,
        [DataColumn(name="place"), DataColumn(name="people", display="COUNT(*)", order="COUNT(*)")],
        where="place IS NOT NULL",
        group_by="place",
    )
    return await respond(datatable, request_data)
