"""Conversation - follow-up Q&A over an analysis result"""
