"""
================================================================================
MongoDB Documentation Examples
================================================================================

The examples published in the MongoDB manual, written against pymongo.
Each function is one suite payload: it either completes or raises.

Database suites receive a pymongo Database; deployment suites receive the
DeploymentHandle; local suites take nothing and never touch the network.

================================================================================
"""

from datetime import datetime

import pymongo
from pymongo import MongoClient
from pymongo.read_concern import ReadConcern
from pymongo.server_api import ServerApi
from pymongo.write_concern import WriteConcern


# ============================================================
# CRUD Examples
# ============================================================

def insert_examples(db) -> None:
    db.inventory.drop()

    db.inventory.insert_one(
        {"item": "canvas", "qty": 100, "tags": ["cotton"], "size": {"h": 28, "w": 35.5, "uom": "cm"}}
    )
    assert db.inventory.count_documents({}) == 1

    cursor = db.inventory.find({"item": "canvas"})
    assert len(list(cursor)) == 1

    db.inventory.insert_many(
        [
            {"item": "journal", "qty": 25, "tags": ["blank", "red"], "size": {"h": 14, "w": 21, "uom": "cm"}},
            {"item": "mat", "qty": 85, "tags": ["gray"], "size": {"h": 27.9, "w": 35.5, "uom": "cm"}},
            {"item": "mousepad", "qty": 25, "tags": ["gel", "blue"], "size": {"h": 19, "w": 22.85, "uom": "cm"}},
        ]
    )
    assert db.inventory.count_documents({}) == 4


def query_top_level_fields_examples(db) -> None:
    db.inventory.drop()
    db.inventory.insert_many(
        [
            {"item": "journal", "qty": 25, "size": {"h": 14, "w": 21, "uom": "cm"}, "status": "A"},
            {"item": "notebook", "qty": 50, "size": {"h": 8.5, "w": 11, "uom": "in"}, "status": "A"},
            {"item": "paper", "qty": 100, "size": {"h": 8.5, "w": 11, "uom": "in"}, "status": "D"},
            {"item": "planner", "qty": 75, "size": {"h": 22.85, "w": 30, "uom": "cm"}, "status": "D"},
            {"item": "postcard", "qty": 45, "size": {"h": 10, "w": 15.25, "uom": "cm"}, "status": "A"},
        ]
    )

    assert len(list(db.inventory.find({}))) == 5
    assert len(list(db.inventory.find({"status": "D"}))) == 2
    assert len(list(db.inventory.find({"status": {"$in": ["A", "D"]}}))) == 5
    assert len(list(db.inventory.find({"status": "A", "qty": {"$lt": 30}}))) == 1
    assert len(list(db.inventory.find({"$or": [{"status": "A"}, {"qty": {"$lt": 30}}]}))) == 3
    cursor = db.inventory.find(
        {"status": "A", "$or": [{"qty": {"$lt": 30}}, {"item": {"$regex": "^p"}}]}
    )
    assert len(list(cursor)) == 2


def query_embedded_documents_examples(db) -> None:
    db.inventory.drop()
    db.inventory.insert_many(
        [
            {"item": "journal", "qty": 25, "size": {"h": 14, "w": 21, "uom": "cm"}, "status": "A"},
            {"item": "notebook", "qty": 50, "size": {"h": 8.5, "w": 11, "uom": "in"}, "status": "A"},
            {"item": "paper", "qty": 100, "size": {"h": 8.5, "w": 11, "uom": "in"}, "status": "D"},
            {"item": "planner", "qty": 75, "size": {"h": 22.85, "w": 30, "uom": "cm"}, "status": "D"},
            {"item": "postcard", "qty": 45, "size": {"h": 10, "w": 15.25, "uom": "cm"}, "status": "A"},
        ]
    )

    # Field order matters for exact embedded document matches
    assert len(list(db.inventory.find({"size": {"h": 14, "w": 21, "uom": "cm"}}))) == 1
    assert len(list(db.inventory.find({"size": {"w": 21, "h": 14, "uom": "cm"}}))) == 0
    assert len(list(db.inventory.find({"size.uom": "in"}))) == 2
    assert len(list(db.inventory.find({"size.h": {"$lt": 15}}))) == 4
    assert len(list(db.inventory.find({"size.h": {"$lt": 15}, "size.uom": "in", "status": "D"}))) == 1


def query_arrays_examples(db) -> None:
    db.inventory.drop()
    db.inventory.insert_many(
        [
            {"item": "journal", "qty": 25, "tags": ["blank", "red"], "dim_cm": [14, 21]},
            {"item": "notebook", "qty": 50, "tags": ["red", "blank"], "dim_cm": [14, 21]},
            {"item": "paper", "qty": 100, "tags": ["red", "blank", "plain"], "dim_cm": [14, 21]},
            {"item": "planner", "qty": 75, "tags": ["blank", "red"], "dim_cm": [22.85, 30]},
            {"item": "postcard", "qty": 45, "tags": ["blue"], "dim_cm": [10, 15.25]},
        ]
    )

    assert len(list(db.inventory.find({"tags": ["red", "blank"]}))) == 1
    assert len(list(db.inventory.find({"tags": {"$all": ["red", "blank"]}}))) == 4
    assert len(list(db.inventory.find({"tags": "red"}))) == 4
    assert len(list(db.inventory.find({"dim_cm": {"$gt": 25}}))) == 1
    assert len(list(db.inventory.find({"dim_cm": {"$gt": 15, "$lt": 20}}))) == 4
    assert len(list(db.inventory.find({"dim_cm": {"$elemMatch": {"$gt": 22, "$lt": 30}}}))) == 1
    assert len(list(db.inventory.find({"dim_cm.1": {"$gt": 25}}))) == 1
    assert len(list(db.inventory.find({"tags": {"$size": 3}}))) == 1


def query_array_of_documents_examples(db) -> None:
    db.inventory.drop()
    db.inventory.insert_many(
        [
            {"item": "journal", "instock": [{"warehouse": "A", "qty": 5}, {"warehouse": "C", "qty": 15}]},
            {"item": "notebook", "instock": [{"warehouse": "C", "qty": 5}]},
            {"item": "paper", "instock": [{"warehouse": "A", "qty": 60}, {"warehouse": "B", "qty": 15}]},
            {"item": "planner", "instock": [{"warehouse": "A", "qty": 40}, {"warehouse": "B", "qty": 5}]},
            {"item": "postcard", "instock": [{"warehouse": "B", "qty": 15}, {"warehouse": "C", "qty": 35}]},
        ]
    )

    assert len(list(db.inventory.find({"instock": {"warehouse": "A", "qty": 5}}))) == 1
    assert len(list(db.inventory.find({"instock": {"qty": 5, "warehouse": "A"}}))) == 0
    assert len(list(db.inventory.find({"instock.0.qty": {"$lte": 20}}))) == 3
    assert len(list(db.inventory.find({"instock.qty": {"$lte": 20}}))) == 5
    assert len(list(db.inventory.find({"instock": {"$elemMatch": {"qty": 5, "warehouse": "A"}}}))) == 1
    assert len(list(db.inventory.find({"instock": {"$elemMatch": {"qty": {"$gt": 10, "$lte": 20}}}}))) == 3
    assert len(list(db.inventory.find({"instock.qty": {"$gt": 10, "$lte": 20}}))) == 4
    assert len(list(db.inventory.find({"instock.qty": 5, "instock.warehouse": "A"}))) == 2


def query_null_missing_fields_examples(db) -> None:
    db.inventory.drop()
    db.inventory.insert_many([{"_id": 1, "item": None}, {"_id": 2}])

    assert len(list(db.inventory.find({"item": None}))) == 2
    assert len(list(db.inventory.find({"item": {"$type": 10}}))) == 1
    assert len(list(db.inventory.find({"item": {"$exists": False}}))) == 1


def projection_examples(db) -> None:
    db.inventory.drop()
    db.inventory.insert_many(
        [
            {"item": "journal", "status": "A", "size": {"h": 14, "w": 21, "uom": "cm"},
             "instock": [{"warehouse": "A", "qty": 5}]},
            {"item": "notebook", "status": "A", "size": {"h": 8.5, "w": 11, "uom": "in"},
             "instock": [{"warehouse": "C", "qty": 5}]},
            {"item": "paper", "status": "D", "size": {"h": 8.5, "w": 11, "uom": "in"},
             "instock": [{"warehouse": "A", "qty": 60}]},
            {"item": "planner", "status": "D", "size": {"h": 22.85, "w": 30, "uom": "cm"},
             "instock": [{"warehouse": "A", "qty": 40}]},
            {"item": "postcard", "status": "A", "size": {"h": 10, "w": 15.25, "uom": "cm"},
             "instock": [{"warehouse": "B", "qty": 15}, {"warehouse": "C", "qty": 35}]},
        ]
    )

    for doc in db.inventory.find({"status": "A"}, {"item": 1, "status": 1}):
        assert set(doc) == {"_id", "item", "status"}

    for doc in db.inventory.find({"status": "A"}, {"item": 1, "status": 1, "_id": 0}):
        assert set(doc) == {"item", "status"}

    for doc in db.inventory.find({"status": "A"}, {"status": 0, "instock": 0}):
        assert "status" not in doc and "instock" not in doc

    for doc in db.inventory.find({"status": "A"}, {"item": 1, "status": 1, "size.uom": 1}):
        assert set(doc["size"]) == {"uom"}

    for doc in db.inventory.find({"status": "A"}, {"item": 1, "status": 1, "instock": {"$slice": -1}}):
        assert len(doc["instock"]) == 1


def update_examples(db) -> None:
    db.inventory.drop()
    db.inventory.insert_many(
        [
            {"item": "canvas", "qty": 100, "size": {"h": 28, "w": 35.5, "uom": "cm"}, "status": "A"},
            {"item": "journal", "qty": 25, "size": {"h": 14, "w": 21, "uom": "cm"}, "status": "A"},
            {"item": "mat", "qty": 85, "size": {"h": 27.9, "w": 35.5, "uom": "cm"}, "status": "A"},
            {"item": "mousepad", "qty": 25, "size": {"h": 19, "w": 22.85, "uom": "cm"}, "status": "P"},
            {"item": "notebook", "qty": 50, "size": {"h": 8.5, "w": 11, "uom": "in"}, "status": "P"},
            {"item": "paper", "qty": 100, "size": {"h": 8.5, "w": 11, "uom": "in"}, "status": "D"},
            {"item": "planner", "qty": 75, "size": {"h": 22.85, "w": 30, "uom": "cm"}, "status": "D"},
            {"item": "postcard", "qty": 45, "size": {"h": 10, "w": 15.25, "uom": "cm"}, "status": "A"},
            {"item": "sketchbook", "qty": 80, "size": {"h": 14, "w": 21, "uom": "cm"}, "status": "A"},
            {"item": "sketch pad", "qty": 95, "size": {"h": 22.85, "w": 30.5, "uom": "cm"}, "status": "A"},
        ]
    )

    db.inventory.update_one(
        {"item": "paper"},
        {"$set": {"size.uom": "cm", "status": "P"}, "$currentDate": {"lastModified": True}},
    )
    for doc in db.inventory.find({"item": "paper"}):
        assert doc["size"]["uom"] == "cm" and doc["status"] == "P" and "lastModified" in doc

    db.inventory.update_many(
        {"qty": {"$lt": 50}},
        {"$set": {"size.uom": "in", "status": "P"}, "$currentDate": {"lastModified": True}},
    )
    for doc in db.inventory.find({"qty": {"$lt": 50}}):
        assert doc["size"]["uom"] == "in" and doc["status"] == "P"

    db.inventory.replace_one(
        {"item": "paper"},
        {"item": "paper", "instock": [{"warehouse": "A", "qty": 60}, {"warehouse": "B", "qty": 40}]},
    )
    for doc in db.inventory.find({"item": "paper"}, {"_id": 0}):
        assert set(doc) == {"item", "instock"}


def delete_examples(db) -> None:
    db.inventory.drop()
    db.inventory.insert_many(
        [
            {"item": "journal", "qty": 25, "size": {"h": 14, "w": 21, "uom": "cm"}, "status": "A"},
            {"item": "notebook", "qty": 50, "size": {"h": 8.5, "w": 11, "uom": "in"}, "status": "P"},
            {"item": "paper", "qty": 100, "size": {"h": 8.5, "w": 11, "uom": "in"}, "status": "D"},
            {"item": "planner", "qty": 75, "size": {"h": 22.85, "w": 30, "uom": "cm"}, "status": "D"},
            {"item": "postcard", "qty": 45, "size": {"h": 10, "w": 15.25, "uom": "cm"}, "status": "A"},
        ]
    )
    assert db.inventory.count_documents({}) == 5

    db.inventory.delete_many({"status": "A"})
    assert db.inventory.count_documents({}) == 3

    db.inventory.delete_one({"status": "D"})
    assert db.inventory.count_documents({}) == 2

    db.inventory.delete_many({})
    assert db.inventory.count_documents({}) == 0


def run_command_examples(db) -> None:
    db.restaurants.drop()
    db.restaurants.insert_one({})

    assert db.command("buildInfo")["ok"] == 1
    assert db.command("collStats", "restaurants")["ok"] == 1


def index_examples(db) -> None:
    db.records.drop()
    db.restaurants.drop()

    db.records.create_index("score")
    db.restaurants.create_index(
        [("cuisine", pymongo.ASCENDING), ("name", pymongo.ASCENDING)],
        partialFilterExpression={"rating": {"$gt": 5}},
    )
    assert "cuisine_1_name_1" in db.restaurants.index_information()


CRUD_EXAMPLES = (
    insert_examples,
    query_top_level_fields_examples,
    query_embedded_documents_examples,
    query_arrays_examples,
    query_array_of_documents_examples,
    query_null_missing_fields_examples,
    projection_examples,
    update_examples,
    delete_examples,
    run_command_examples,
    index_examples,
)


def crud_examples(db) -> None:
    """Run every CRUD, command and index example in manual order."""
    for example in CRUD_EXAMPLES:
        example(db)


# ============================================================
# Versioned (Stable) API Examples
# ============================================================

def versioned_api_examples() -> None:
    """Declare Stable API clients; connect=False keeps this local."""
    clients = [
        MongoClient(server_api=ServerApi("1"), connect=False),
        MongoClient(server_api=ServerApi("1", strict=True), connect=False),
        MongoClient(server_api=ServerApi("1", strict=False), connect=False),
        MongoClient(server_api=ServerApi("1", deprecation_errors=True), connect=False),
    ]
    try:
        assert clients[1].options.pool_options.server_api.strict is True
    finally:
        for client in clients:
            client.close()


def versioned_api_strict_count_example(handle) -> None:
    """
    Count documents through a strict Stable API client.

    Needs 5.0+ and no auth: the example client is built from the bare
    connection string with apiStrict enabled.
    """
    client = MongoClient(handle.uri, server_api=ServerApi("1", strict=True))
    try:
        sales = client.get_database(handle.descriptor.database).sales
        sales.drop()
        sales.insert_many(
            [
                {"_id": 1, "item": "abc", "price": 10, "quantity": 2, "date": datetime(2021, 1, 1, 8)},
                {"_id": 2, "item": "jkl", "price": 20, "quantity": 1, "date": datetime(2021, 2, 3, 9)},
                {"_id": 3, "item": "xyz", "price": 5, "quantity": 5, "date": datetime(2021, 2, 3, 9, 5)},
                {"_id": 4, "item": "abc", "price": 10, "quantity": 10, "date": datetime(2021, 2, 15, 8)},
                {"_id": 5, "item": "xyz", "price": 5, "quantity": 10, "date": datetime(2021, 2, 15, 9, 5)},
                {"_id": 6, "item": "xyz", "price": 5, "quantity": 5, "date": datetime(2021, 2, 15, 12, 5, 10)},
                {"_id": 7, "item": "xyz", "price": 5, "quantity": 10, "date": datetime(2021, 2, 15, 14, 12, 12)},
                {"_id": 8, "item": "abc", "price": 10, "quantity": 5, "date": datetime(2021, 3, 16, 20, 20, 13)},
            ]
        )
        assert sales.count_documents({}) == 8
    finally:
        client.close()


# ============================================================
# Aggregation Examples
# ============================================================

def aggregation_examples(db) -> None:
    db.sales.drop()
    db.sales.insert_many(
        [
            {"date": datetime(2021, 1, 30), "items": [
                {"fruit": "kiwi", "quantity": 2, "price": 0.5},
                {"fruit": "apple", "quantity": 1, "price": 1.0},
            ]},
            {"date": datetime(2021, 1, 31), "items": [
                {"fruit": "banana", "quantity": 5, "price": 0.25},
                {"fruit": "apple", "quantity": 2, "price": 1.0},
            ]},
        ]
    )

    list(db.sales.aggregate([{"$match": {"items.fruit": "banana"}}, {"$sort": {"date": 1}}]))

    list(db.sales.aggregate(
        [
            {"$unwind": "$items"},
            {"$match": {"items.fruit": "banana"}},
            {"$group": {"_id": {"day": {"$dayOfWeek": "$date"}}, "count": {"$sum": "$items.quantity"}}},
            {"$project": {"dayOfWeek": "$_id.day", "numberSold": "$count", "_id": 0}},
            {"$sort": {"numberSold": 1}},
        ]
    ))

    list(db.sales.aggregate(
        [
            {"$unwind": "$items"},
            {"$group": {
                "_id": {"day": {"$dayOfWeek": "$date"}},
                "items_sold": {"$sum": "$items.quantity"},
                "revenue": {"$sum": {"$multiply": ["$items.quantity", "$items.price"]}},
            }},
            {"$project": {
                "day": "$_id.day",
                "revenue": 1,
                "items_sold": 1,
                "discount": {"$cond": {"if": {"$lte": ["$revenue", 250]}, "then": 25, "else": 0}},
            }},
        ]
    ))

    db.air_alliances.drop()
    db.air_airlines.drop()
    db.air_airlines.insert_many(
        [{"name": "Air Canada", "country": "Canada"}, {"name": "Lufthansa", "country": "Germany"}]
    )
    db.air_alliances.insert_one({"name": "Star Alliance", "airlines": ["Air Canada", "Lufthansa"]})

    # $lookup with let/pipeline is the 3.6+ feature this suite is gated on
    alliances = list(db.air_alliances.aggregate(
        [
            {"$lookup": {
                "from": "air_airlines",
                "let": {"constituents": "$airlines"},
                "pipeline": [{"$match": {"$expr": {"$in": ["$name", "$$constituents"]}}}],
                "as": "airlines",
            }},
            {"$project": {
                "_id": 0,
                "name": 1,
                "airlines": {"$filter": {
                    "input": "$airlines",
                    "as": "airline",
                    "cond": {"$eq": ["$$airline.country", "Canada"]},
                }},
            }},
        ]
    ))
    assert [a["name"] for a in alliances[0]["airlines"]] == ["Air Canada"]


# ============================================================
# Transaction Examples
# ============================================================

def transaction_examples(handle) -> None:
    client = handle.client
    employees = client.hr.employees
    events = client.reporting.events
    try:
        employees.drop()
        events.drop()
        employees.insert_one({"employee": 3, "status": "Active"})
        events.insert_one({"employee": 3, "status": {"new": "Active", "old": None}})

        def update_employee_info(session):
            employees_coll = session.client.hr.employees
            events_coll = session.client.reporting.events
            employees_coll.update_one(
                {"employee": 3}, {"$set": {"status": "Inactive"}}, session=session
            )
            events_coll.insert_one(
                {"employee": 3, "status": {"new": "Inactive", "old": "Active"}}, session=session
            )

        with client.start_session() as session:
            session.with_transaction(
                update_employee_info,
                read_concern=ReadConcern("snapshot"),
                write_concern=WriteConcern(w="majority"),
            )

        employee = employees.find_one({"employee": 3})
        assert employee is not None and employee["status"] == "Inactive"
        assert events.count_documents({"employee": 3}) == 2
    finally:
        client.drop_database("hr")
        client.drop_database("reporting")


# ============================================================
# Change Stream Examples
# ============================================================

def change_stream_examples(db) -> None:
    db.inventory.drop()
    db.inventory.insert_one({"username": "seed"})

    with db.inventory.watch() as stream:
        db.inventory.insert_one({"username": "alice"})
        change = next(stream)
        assert change["operationType"] == "insert"

    with db.inventory.watch(full_document="updateLookup") as stream:
        db.inventory.update_one({"username": "alice"}, {"$set": {"status": "active"}})
        change = next(stream)
        assert change["fullDocument"]["status"] == "active"
        resume_token = stream.resume_token

    with db.inventory.watch(resume_after=resume_token) as stream:
        db.inventory.delete_one({"username": "alice"})
        change = next(stream)
        assert change["operationType"] == "delete"

    pipeline = [
        {"$match": {"fullDocument.username": "alice"}},
        {"$addFields": {"newField": "this is an added field!"}},
    ]
    with db.inventory.watch(pipeline=pipeline) as stream:
        db.inventory.insert_one({"username": "alice"})
        change = next(stream)
        assert change["newField"] == "this is an added field!"
