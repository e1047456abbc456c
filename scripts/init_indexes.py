# scripts/init_indexes.py

from genie.MongoManager import MongoManager

if __name__ == "__main__":
    print("🔧 Running MongoDB index initialization for shops, customers, chatbots and logs...")
    mongo = MongoManager()
    mongo.create_indexes()
