"""
Recommendation engine: turns completed quiz state into a ranked course and
book bundle with narrative analysis.

Modules
-------
normalizer       : normalize_results() - store records -> QuizResult list.
course_matcher   : score_course() + match_courses() - averaged per-quiz scores,
                   fallback padding, reason selection.
book_recommender : recommend_books() - per-quiz picks, dedupe, difficulty order.
narrator         : single_quiz_analysis() + combined_analysis() - text only.
aggregator       : RecommendationEngine - orchestration and truncation.
reporter         : bundle_to_dict() + format_recommendations_text()
                   + write_recommendations_json() - output rendering.
"""
