"""docsearch - TF-IDF ranked search over a directory of documents"""
