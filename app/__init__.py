"""TableBook API"""
