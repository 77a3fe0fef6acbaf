"""Database schema, stores for the entities, and the invitation mailer."""