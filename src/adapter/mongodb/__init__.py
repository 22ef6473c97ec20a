USERS_COLLECTION_NAME = 'users'
PROPERTIES_COLLECTION_NAME = 'properties'
