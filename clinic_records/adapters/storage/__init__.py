"""Storage adapters for Clinic Records.

This module contains the MongoDB adapters that implement the collection ports.
"""

from clinic_records.adapters.storage.mongo_adapter import (
    MongoClinicalStore,
    MongoConnections,
    MongoPatientStore,
    MongoUserStore,
)

__all__ = ["MongoClinicalStore", "MongoConnections", "MongoPatientStore", "MongoUserStore"]
