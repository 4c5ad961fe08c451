"""Reusable byte buffers and the pool that hands them out."""