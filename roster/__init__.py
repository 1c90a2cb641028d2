"""
roster: member/team search with composable filters and count-aware pagination.
"""
