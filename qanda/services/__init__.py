"""
Q&A Backend: Services Layer
============================

What:  Business logic between routes (HTTP) and the database.
How:   Services take the request's AsyncSession plus an already-validated
       payload, run existence guards, then the SQL statements.

Service Inventory:
    - guards:           ensure_question_exists / ensure_answer_exists
    - QuestionService:  list, create, search, get, update, delete (with cascade)
    - AnswerService:    list, create, delete all for a question
    - VoteService:      append question / answer votes
"""
